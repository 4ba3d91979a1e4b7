"""
GitHub OAuth Exchanger

Responsibilities:
- Build the authorize URL that starts the OAuth flow
- Exchange an authorization code for an access token
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from gitpress.errors import AuthExchangeError, ConfigurationError, NetworkError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"


class OAuthExchanger:
    """Exchanges OAuth authorization codes against GitHub's token endpoint."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: Optional[str] = None,
        timeout: float = 10.0,
        http: Optional[requests.Session] = None,
    ):
        if not client_id or not client_secret:
            raise ConfigurationError("GitHub client ID or secret not configured")
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.http = http or requests.Session()

    def authorize_url(self, state: str, scopes: str = "repo read:user") -> str:
        """Build the GitHub authorize URL the browser is redirected to."""
        params = {"client_id": self.client_id, "scope": scopes, "state": state}
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """
        Exchange an authorization code for an access token.

        Single attempt, no retries: an OAuth code is single-use.

        Args:
            code: Authorization code from the callback redirect

        Returns:
            Access token string

        Raises:
            AuthExchangeError: Non-2xx status, error field, or no access_token
            NetworkError: Transport failure
        """
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
        }
        if self.redirect_uri:
            payload["redirect_uri"] = self.redirect_uri

        try:
            response = await asyncio.to_thread(
                self.http.post,
                TOKEN_URL,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"GitHub token exchange transport error: {e}")
            raise NetworkError("Could not reach GitHub token endpoint") from e

        if not response.ok:
            logger.error(
                f"GitHub token exchange failed: {response.status_code} {response.reason}"
            )
            raise AuthExchangeError(
                "GitHub token exchange failed", status=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("GitHub token exchange returned a non-JSON body")
            raise AuthExchangeError(
                "Malformed token exchange response", status=response.status_code
            ) from e

        if not isinstance(data, dict):
            raise AuthExchangeError(
                "Malformed token exchange response", status=response.status_code
            )

        if data.get("error"):
            logger.error(
                f"GitHub token exchange error: {data.get('error')} - "
                f"{data.get('error_description')}"
            )
            raise AuthExchangeError(
                f"GitHub token exchange error: {data['error']}",
                status=response.status_code,
            )

        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            logger.error("GitHub token exchange response has no access_token")
            raise AuthExchangeError(
                "No access token in GitHub response", status=response.status_code
            )

        logger.info("GitHub access token obtained")
        return token
