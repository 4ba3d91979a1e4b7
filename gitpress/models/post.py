"""
Post Data Models

Drafts submitted for commit, and metadata read back from the post store.
"""

import re
from pydantic import BaseModel, Field, field_validator

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.fullmatch(slug))


class PostDraft(BaseModel):
    """User-supplied post awaiting commit."""

    title: str = Field(..., description="Post title")
    slug: str = Field(..., description="URL slug, lowercase words joined by hyphens")
    content: str = Field(..., description="Markdown body")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("slug")
    @classmethod
    def slug_format(cls, value: str) -> str:
        if not is_valid_slug(value):
            raise ValueError(
                "must be lowercase letters and digits separated by single hyphens"
            )
        return value


class PostMeta(BaseModel):
    """Listing entry for a post."""

    slug: str
    title: str
    date: str  # ISO-8601
    excerpt: str = ""


class PostData(PostMeta):
    """A single post with its Markdown body."""

    content: str
