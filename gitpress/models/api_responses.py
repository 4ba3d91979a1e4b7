"""
API Response Models

Pydantic models for consistent API response structures.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from gitpress.integrations.github.models import GitHubUser


class SubmissionErrorKind(str, Enum):
    """Why a submission failed."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    CONFIGURATION = "configuration"
    CONFLICT = "conflict"
    REMOTE = "remote"


class SubmissionResponse(BaseModel):
    """Result of a post submission."""

    success: bool = Field(..., description="Whether the post was committed")
    error: Optional[str] = Field(None, description="User-facing error message")
    error_kind: Optional[SubmissionErrorKind] = Field(
        None, description="Failure category"
    )
    field_errors: Optional[Dict[str, List[str]]] = Field(
        None, description="Per-field validation messages"
    )
    path: Optional[str] = Field(None, description="Path of the post in the repository")
    commit_sha: Optional[str] = Field(None, description="SHA of the new commit")


class CurrentUserResponse(BaseModel):
    """Response for the current-user endpoint."""

    user: Optional[GitHubUser] = None
