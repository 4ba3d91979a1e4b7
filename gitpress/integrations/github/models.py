"""
GitHub Data Models
"""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, ConfigDict


class RepositoryRef(BaseModel):
    """Target repository for post commits."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class GitHubUser(BaseModel):
    """Authenticated GitHub identity as stored in the session."""

    id: str  # Kept as a string so large numeric ids survive JSON round-trips
    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass
class CommitResult:
    """Result of a create-or-update file write."""

    path: str
    created: bool
    commit_sha: Optional[str] = None
