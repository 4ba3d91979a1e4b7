"""
Shared Utility Functions

Front-matter rendering and parsing for post Markdown files.
"""

import re
import yaml
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Tuple

from gitpress.models.post import PostDraft

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)(.*)$", re.DOTALL)


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as an ISO-8601 UTC timestamp with millisecond precision.

    Naive datetimes are taken to be UTC.
    """
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def render_post_document(draft: PostDraft, created_at: Optional[datetime] = None) -> str:
    """
    Render a draft as a Markdown file with a YAML front-matter block.

    Args:
        draft: Validated post draft
        created_at: Creation time (defaults to now)

    Returns:
        Front matter (title, date, slug) followed by a blank line and the body
    """
    frontmatter = yaml.safe_dump(
        {
            "title": draft.title,
            "date": iso_timestamp(created_at),
            "slug": draft.slug,
        },
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
    return f"---\n{frontmatter}---\n\n{draft.content}"


def parse_front_matter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a Markdown document into front-matter metadata and body.

    Documents without a front-matter block, or with a block that is not a YAML
    mapping, yield an empty mapping and the unchanged content.

    Args:
        content: Raw Markdown content

    Returns:
        Tuple of (metadata, body)
    """
    match = FRONTMATTER_RE.match(content)
    if not match:
        return {}, content

    try:
        data = yaml.safe_load(match.group(1)) if match.group(1).strip() else {}
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse YAML frontmatter: {e}")
        return {}, content

    if not isinstance(data, dict):
        logger.warning("Frontmatter is not a key/value mapping, ignoring it")
        return {}, content

    body = match.group(2)
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]

    return {str(key): _normalize_value(value) for key, value in data.items()}, body


def _normalize_value(value: Any) -> Any:
    # YAML resolves unquoted timestamps to datetime/date objects
    if isinstance(value, datetime):
        return iso_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def normalize_date(value: Any) -> Optional[str]:
    """
    Convert a front-matter date to an ISO-8601 UTC timestamp.

    Accepts datetimes, dates and ISO-8601 strings (date-only, offsets, "Z").
    Date-only values are midnight UTC. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        return iso_timestamp(value)
    if isinstance(value, date):
        return iso_timestamp(datetime(value.year, value.month, value.day))
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        # fromisoformat only accepts "Z" from Python 3.11
        text = text[:-1] + "+00:00"
    try:
        return iso_timestamp(datetime.fromisoformat(text))
    except ValueError:
        return None
