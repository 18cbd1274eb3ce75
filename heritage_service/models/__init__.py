"""
Models package for cultural content data.

This package contains the Pydantic model for content items and the helpers
that validate raw payloads coming from catalog sources or API callers.
"""

from .content_models import (
    ContentCategory,
    ContentItem,
    MalformedItemError,
)

from .utils import parse_items

__all__ = [
    "ContentCategory",
    "ContentItem",
    "MalformedItemError",
    "parse_items",
]
