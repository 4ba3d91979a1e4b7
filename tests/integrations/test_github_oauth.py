"""
Unit Tests for the GitHub OAuth Exchanger
"""

from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from gitpress.errors import AuthExchangeError, ConfigurationError, NetworkError
from gitpress.integrations.github import OAuthExchanger
from gitpress.integrations.github.oauth import TOKEN_URL


def fake_response(status_code=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "OK" if response.ok else "Error"
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


def exchanger_with(response=None, error=None, redirect_uri="http://localhost/cb"):
    http = MagicMock()
    if error is not None:
        http.post.side_effect = error
    else:
        http.post.return_value = response
    exchanger = OAuthExchanger(
        client_id="cid", client_secret="secret", redirect_uri=redirect_uri, http=http
    )
    return exchanger, http


def test_missing_credentials_is_configuration_error():
    with pytest.raises(ConfigurationError):
        OAuthExchanger(client_id="", client_secret="secret")
    with pytest.raises(ConfigurationError):
        OAuthExchanger(client_id="cid", client_secret="")


def test_authorize_url_carries_client_scope_state_and_redirect():
    exchanger, _ = exchanger_with(fake_response())
    url = urlparse(exchanger.authorize_url("xyz", scopes="repo read:user"))
    params = parse_qs(url.query)

    assert f"{url.scheme}://{url.netloc}{url.path}" == "https://github.com/login/oauth/authorize"
    assert params["client_id"] == ["cid"]
    assert params["state"] == ["xyz"]
    assert params["scope"] == ["repo read:user"]
    assert params["redirect_uri"] == ["http://localhost/cb"]


@pytest.mark.asyncio
async def test_exchange_code_success():
    exchanger, http = exchanger_with(fake_response(body={"access_token": "gho_abc"}))

    assert await exchanger.exchange_code("code-1") == "gho_abc"

    args, kwargs = http.post.call_args
    assert args == (TOKEN_URL,)
    assert kwargs["json"] == {
        "client_id": "cid",
        "client_secret": "secret",
        "code": "code-1",
        "redirect_uri": "http://localhost/cb",
    }
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["timeout"] == 10.0


@pytest.mark.asyncio
async def test_exchange_code_without_redirect_uri():
    exchanger, http = exchanger_with(
        fake_response(body={"access_token": "t"}), redirect_uri=None
    )
    await exchanger.exchange_code("c")
    assert "redirect_uri" not in http.post.call_args.kwargs["json"]


@pytest.mark.asyncio
async def test_exchange_non_2xx_fails():
    exchanger, http = exchanger_with(fake_response(status_code=500, body={}))

    with pytest.raises(AuthExchangeError) as excinfo:
        await exchanger.exchange_code("c")

    assert excinfo.value.status == 500
    assert http.post.call_count == 1


@pytest.mark.asyncio
async def test_exchange_error_field_fails():
    """GitHub reports bad codes with a 200 and an error field."""
    exchanger, _ = exchanger_with(
        fake_response(
            body={
                "error": "bad_verification_code",
                "error_description": "The code passed is incorrect or expired.",
            }
        )
    )

    with pytest.raises(AuthExchangeError, match="bad_verification_code"):
        await exchanger.exchange_code("c")


@pytest.mark.asyncio
async def test_exchange_missing_access_token_fails():
    exchanger, _ = exchanger_with(fake_response(body={"token_type": "bearer"}))

    with pytest.raises(AuthExchangeError):
        await exchanger.exchange_code("c")


@pytest.mark.asyncio
async def test_exchange_non_json_body_fails():
    exchanger, _ = exchanger_with(fake_response(json_error=True))

    with pytest.raises(AuthExchangeError):
        await exchanger.exchange_code("c")


@pytest.mark.asyncio
async def test_exchange_transport_error_is_not_retried():
    exchanger, http = exchanger_with(error=requests.ConnectionError("refused"))

    with pytest.raises(NetworkError):
        await exchanger.exchange_code("c")

    assert http.post.call_count == 1
