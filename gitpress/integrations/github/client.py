"""
GitHub API Client Factory

Builds per-token PyGithub clients. Each request carries its own token, so
clients are created on demand rather than shared.
"""

import logging
from typing import Callable
from github import Auth, Github

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

GitHubFactory = Callable[[str], Github]


def build_github_client(token: str, timeout: float = DEFAULT_TIMEOUT) -> Github:
    """
    Create a PyGithub client authenticated with an OAuth access token.

    Transport-level retries are disabled: a PUT to the contents API must never
    be replayed after it may have landed. Callers decide which reads are safe
    to retry.

    Args:
        token: OAuth access token (sent as ``Authorization: token <token>``)
        timeout: Per-request timeout in seconds

    Returns:
        Configured Github client
    """
    return Github(auth=Auth.Token(token), timeout=timeout, retry=None)


def github_factory(timeout: float = DEFAULT_TIMEOUT) -> GitHubFactory:
    """Return a token -> client factory bound to a timeout."""

    def factory(token: str) -> Github:
        return build_github_client(token, timeout=timeout)

    return factory
