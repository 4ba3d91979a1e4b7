"""
GitHub User Resolver

Fetches the authenticated user's profile and maps it to a GitHubUser.
"""

import asyncio
import logging
from typing import Any, Dict

import requests
from github.GithubException import GithubException

from gitpress.errors import NetworkError, ProfileFetchError
from gitpress.integrations.github.client import GitHubFactory, build_github_client
from gitpress.integrations.github.models import GitHubUser

logger = logging.getLogger(__name__)


class UserResolver:
    """Resolves an access token to the GitHub identity behind it."""

    def __init__(self, github_factory: GitHubFactory = build_github_client):
        self.github_factory = github_factory

    async def resolve(self, access_token: str) -> GitHubUser:
        """
        Fetch ``GET /user`` for the token.

        Raises:
            ProfileFetchError: Non-2xx response or missing id/login
            NetworkError: Transport failure
        """
        try:
            raw = await asyncio.to_thread(self._fetch_profile, access_token)
        except GithubException as e:
            logger.error(f"Failed to fetch GitHub user: {e.status}")
            raise ProfileFetchError("Failed to fetch GitHub user", status=e.status) from e
        except requests.RequestException as e:
            logger.error(f"GitHub user fetch transport error: {e}")
            raise NetworkError("Could not reach GitHub user endpoint") from e

        return self._to_user(raw)

    def _fetch_profile(self, access_token: str) -> Dict[str, Any]:
        client = self.github_factory(access_token)
        # raw_data forces the lazy AuthenticatedUser to complete
        return client.get_user().raw_data

    @staticmethod
    def _to_user(raw: Any) -> GitHubUser:
        if not isinstance(raw, dict):
            raise ProfileFetchError("Malformed GitHub user response")

        user_id = raw.get("id")
        login = raw.get("login")
        # bool is an int subclass
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise ProfileFetchError("GitHub user response has no numeric id")
        if not isinstance(login, str) or not login:
            raise ProfileFetchError("GitHub user response has no login")

        name = raw.get("name")
        avatar_url = raw.get("avatar_url")
        user = GitHubUser(
            id=str(user_id),
            login=login,
            name=name if isinstance(name, str) else None,
            avatar_url=avatar_url if isinstance(avatar_url, str) else None,
        )
        logger.info(f"Resolved GitHub user: {user.login}")
        return user
