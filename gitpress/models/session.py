"""
Session Data Models
"""

from pydantic import BaseModel

from gitpress.integrations.github.models import GitHubUser


class SessionData(BaseModel):
    """Decrypted session cookie payload."""

    user: GitHubUser
    access_token: str
    expires: float  # Unix timestamp, seconds
