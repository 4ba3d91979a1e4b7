from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import Tuple

from gitpress.errors import ConfigurationError
from gitpress.integrations.github.models import RepositoryRef

SEVEN_DAYS = 60 * 60 * 24 * 7


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "GitPress"
    debug: bool = False
    public_base_url: str = "http://127.0.0.1:8000"

    # GitHub OAuth app
    github_client_id: str = ""
    github_client_secret: str = ""
    github_oauth_scopes: str = "repo read:user"

    # GitHub content repository
    github_repo_owner: str = ""
    github_repo_name: str = ""
    github_posts_path: str = "posts"
    github_branch: str = ""  # Empty means the repository default branch

    # Sessions
    auth_secret: str = ""
    session_cookie_name: str = "app_session"
    session_ttl_seconds: int = SEVEN_DAYS
    secure_cookies: bool = False

    # Outbound HTTP
    http_timeout: float = 10.0  # Seconds, per call

    # Local post store
    local_posts_dir: str = "posts"

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def callback_url(self) -> str:
        return f"{self.public_base_url.rstrip('/')}/api/auth/github/callback"

    @property
    def posts_path(self) -> str:
        return self.github_posts_path.strip("/") or "posts"

    def oauth_credentials(self) -> Tuple[str, str]:
        """Return (client_id, client_secret) or raise ConfigurationError."""
        _require(
            GITHUB_CLIENT_ID=self.github_client_id,
            GITHUB_CLIENT_SECRET=self.github_client_secret,
        )
        return self.github_client_id, self.github_client_secret

    def repository(self) -> RepositoryRef:
        _require(
            GITHUB_REPO_OWNER=self.github_repo_owner,
            GITHUB_REPO_NAME=self.github_repo_name,
        )
        return RepositoryRef(owner=self.github_repo_owner, name=self.github_repo_name)

    def session_secret(self) -> str:
        _require(AUTH_SECRET=self.auth_secret)
        return self.auth_secret


def _require(**values: str) -> None:
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
