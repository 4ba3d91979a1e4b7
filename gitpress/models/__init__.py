# Shared data models
from gitpress.models.post import PostDraft, PostMeta, PostData, is_valid_slug
from gitpress.models.session import SessionData
from gitpress.models.api_responses import (
    SubmissionResponse,
    SubmissionErrorKind,
    CurrentUserResponse,
)

__all__ = [
    "PostDraft",
    "PostMeta",
    "PostData",
    "is_valid_slug",
    "SessionData",
    "SubmissionResponse",
    "SubmissionErrorKind",
    "CurrentUserResponse",
]
