"""
Filesystem post store.

Reads Markdown posts (front matter + body) from a local directory, typically a
checkout of the content repository.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from gitpress.models.post import PostData, PostMeta, is_valid_slug
from gitpress.utils.helpers import iso_timestamp, normalize_date, parse_front_matter

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".mdx")
UNTITLED = "Untitled Post"


class PostStore:
    """Lists and loads posts from a directory of Markdown files."""

    def __init__(self, posts_dir: Path):
        self.posts_dir = Path(posts_dir)

    def _post_files(self) -> List[Path]:
        try:
            return sorted(
                path
                for path in self.posts_dir.iterdir()
                if path.is_file() and path.suffix in POST_SUFFIXES
            )
        except OSError as e:
            logger.error(f"Error reading posts directory {self.posts_dir}: {e}")
            return []

    def list_slugs(self) -> List[str]:
        return [path.stem for path in self._post_files()]

    def list_posts(self) -> List[PostMeta]:
        """All post metadata, newest first."""
        posts = []
        for path in self._post_files():
            post = self._load(path)
            if post is not None:
                posts.append(PostMeta(**post.model_dump(exclude={"content"})))

        # ISO-8601 UTC strings sort chronologically
        posts.sort(key=lambda post: post.date, reverse=True)
        return posts

    def get_post(self, slug: str) -> Optional[PostData]:
        """Load a single post, or None if the slug is malformed or unknown."""
        if not is_valid_slug(slug):
            logger.warning(f"Rejected malformed post slug: {slug!r}")
            return None

        for suffix in POST_SUFFIXES:
            path = self.posts_dir / f"{slug}{suffix}"
            if path.is_file():
                return self._load(path)

        logger.warning(f'Post file not found for slug "{slug}" in {self.posts_dir}')
        return None

    def _load(self, path: Path) -> Optional[PostData]:
        try:
            text = path.read_text(encoding="utf-8")
            modified = path.stat().st_mtime
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f'Error reading post file "{path.name}": {e}')
            return None

        metadata, body = parse_front_matter(text)
        raw_date = metadata.get("date")
        date = normalize_date(raw_date)
        if date is None:
            if raw_date:
                logger.warning(f"Unrecognised date {raw_date!r} in {path.name}, using mtime")
            date = iso_timestamp(datetime.fromtimestamp(modified, tz=timezone.utc))

        excerpt = metadata.get("excerpt")
        return PostData(
            slug=path.stem,
            title=str(metadata.get("title") or UNTITLED),
            date=date,
            excerpt=str(excerpt) if excerpt else "",
            content=body,
        )
