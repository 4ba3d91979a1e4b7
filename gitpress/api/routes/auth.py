"""
Auth API Routes

GitHub OAuth login, logout and current-user lookup.
"""

import logging
import secrets
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from gitpress.config import Settings, get_settings
from gitpress.api.deps import get_oauth_exchanger, get_session_manager, get_user_resolver
from gitpress.errors import GitPressError
from gitpress.integrations.github import OAuthExchanger, UserResolver
from gitpress.models.api_responses import CurrentUserResponse
from gitpress.services.session_store import SessionManager

logger = logging.getLogger(__name__)
router = APIRouter()

STATE_COOKIE_NAME = "oauth_state"
STATE_TTL = 10 * 60  # 10 minutes

ADMIN_PATH = "/admin"


def _error_redirect(code: str) -> RedirectResponse:
    response = RedirectResponse(f"/?error={code}", status_code=303)
    # The state is single-use whatever the outcome
    response.delete_cookie(STATE_COOKIE_NAME, path="/")
    return response


@router.get("/github")
async def github_login(
    settings: Settings = Depends(get_settings),
    exchanger: Optional[OAuthExchanger] = Depends(get_oauth_exchanger),
):
    """Redirect the browser to GitHub's authorize page."""
    if exchanger is None:
        return JSONResponse(
            status_code=500, content={"error": "Server configuration error."}
        )

    state = secrets.token_urlsafe(32)
    response = RedirectResponse(
        exchanger.authorize_url(state, scopes=settings.github_oauth_scopes),
        status_code=307,
    )
    response.set_cookie(
        STATE_COOKIE_NAME,
        state,
        max_age=STATE_TTL,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    return response


@router.get("/github/callback")
async def github_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    exchanger: Optional[OAuthExchanger] = Depends(get_oauth_exchanger),
    resolver: UserResolver = Depends(get_user_resolver),
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Complete the OAuth flow.

    Exchanges the code, fetches the user, issues the session cookie and
    redirects to the admin area. Every failure redirects home with an error code.
    """
    if error:
        logger.warning(f"GitHub authorization was not granted: {error}")
        return _error_redirect("github_auth_denied")

    if not code:
        logger.error("Authorization code not found in callback")
        return _error_redirect("github_auth_failed")

    expected_state = request.cookies.get(STATE_COOKIE_NAME)
    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        logger.error("OAuth state mismatch in callback")
        return _error_redirect("github_state_mismatch")

    if exchanger is None:
        return _error_redirect("github_callback_failed")

    try:
        access_token = await exchanger.exchange_code(code)
        user = await resolver.resolve(access_token)
    except GitPressError as e:
        logger.error(f"GitHub callback error: {type(e).__name__}: {e}")
        return _error_redirect("github_callback_failed")

    response = RedirectResponse(ADMIN_PATH, status_code=303)
    sessions.create_session(response, user, access_token)
    response.delete_cookie(STATE_COOKIE_NAME, path="/")
    return response


@router.post("/logout")
async def logout(sessions: SessionManager = Depends(get_session_manager)):
    """Delete the session cookie."""
    response = JSONResponse(content={"success": True})
    sessions.delete_session(response)
    return response


@router.get("/me", response_model=CurrentUserResponse)
async def current_user(
    request: Request, sessions: SessionManager = Depends(get_session_manager)
):
    """Return the signed-in user, or null."""
    lookup = sessions.read(request)
    body = CurrentUserResponse(user=lookup.session.user if lookup.session else None)
    response = JSONResponse(content=body.model_dump())
    if lookup.stale:
        sessions.delete_session(response)
    return response
