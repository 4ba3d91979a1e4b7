"""
Utility package exports
"""

from gitpress.utils.helpers import (
    iso_timestamp,
    normalize_date,
    parse_front_matter,
    render_post_document,
)

__all__ = ["iso_timestamp", "normalize_date", "parse_front_matter", "render_post_document"]
