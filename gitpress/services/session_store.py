"""
Encrypted cookie sessions.

The session cookie holds the GitHub user and access token, encrypted and
authenticated with Fernet. The token never leaves the cookie.
"""

import base64
import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from cryptography.fernet import Fernet, InvalidToken
from fastapi import Request, Response
from pydantic import ValidationError as PydanticValidationError

from gitpress.errors import ConfigurationError
from gitpress.integrations.github.models import GitHubUser
from gitpress.models.session import SessionData

logger = logging.getLogger(__name__)

SESSION_TTL = 60 * 60 * 24 * 7  # 7 days in seconds


@dataclass
class SessionLookup:
    """Outcome of reading the session cookie."""

    session: Optional[SessionData] = None
    stale: bool = False  # A cookie was present but expired or corrupt


class SessionManager:
    """Issues, verifies and clears the session cookie."""

    def __init__(
        self,
        secret: str,
        cookie_name: str = "app_session",
        ttl_seconds: int = SESSION_TTL,
        secure: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ConfigurationError("AUTH_SECRET environment variable is not set")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
        self._fernet = Fernet(key)
        self.cookie_name = cookie_name
        self.ttl_seconds = ttl_seconds
        self.secure = secure
        self.clock = clock

    def issue(self, payload: Dict[str, Any]) -> str:
        """Encrypt a payload into a session token."""
        data = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return self._fernet.encrypt_at_time(data, int(self.clock())).decode("ascii")

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        """Decrypt a session token; None if it is invalid, tampered or too old."""
        try:
            data = self._fernet.decrypt_at_time(
                token.encode("ascii"), self.ttl_seconds, int(self.clock())
            )
            payload = json.loads(data)
        except (InvalidToken, UnicodeEncodeError, ValueError) as e:
            logger.warning(f"Failed to verify session: {type(e).__name__}")
            return None
        return payload if isinstance(payload, dict) else None

    def read(self, request: Request) -> SessionLookup:
        """Read and validate the session cookie of a request."""
        token = request.cookies.get(self.cookie_name)
        if not token:
            return SessionLookup()

        payload = self.verify(token)
        if payload is None:
            return SessionLookup(stale=True)

        try:
            session = SessionData.model_validate(payload)
        except PydanticValidationError:
            logger.warning("Session payload has an unexpected shape")
            return SessionLookup(stale=True)

        if self.clock() >= session.expires:
            logger.info(f"Session expired for user {session.user.login}")
            return SessionLookup(stale=True)

        return SessionLookup(session=session)

    def create_session(
        self, response: Response, user: GitHubUser, access_token: str
    ) -> SessionData:
        """Issue a session for user and set it as a cookie on response."""
        session = SessionData(
            user=user,
            access_token=access_token,
            expires=self.clock() + self.ttl_seconds,
        )
        response.set_cookie(
            self.cookie_name,
            self.issue(session.model_dump()),
            max_age=self.ttl_seconds,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )
        logger.info(f"Session created for user {user.login}")
        return session

    def delete_session(self, response: Response) -> None:
        """Expire the session cookie immediately."""
        response.delete_cookie(
            self.cookie_name,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )
