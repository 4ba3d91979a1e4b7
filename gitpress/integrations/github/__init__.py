"""
GitHub Integration Module

OAuth code exchange, user profile lookup and single-file content commits.
"""

from gitpress.integrations.github.client import build_github_client, github_factory
from gitpress.integrations.github.oauth import OAuthExchanger
from gitpress.integrations.github.users import UserResolver
from gitpress.integrations.github.contents import ContentCommitter
from gitpress.integrations.github.models import CommitResult, GitHubUser, RepositoryRef

__all__ = [
    "build_github_client",
    "github_factory",
    "OAuthExchanger",
    "UserResolver",
    "ContentCommitter",
    "CommitResult",
    "GitHubUser",
    "RepositoryRef",
]
