"""
Content-related data models.

This module contains Pydantic models for cultural content items (tales,
proverbs, songs, dances, crafts and riddles) as they flow between the
catalog sources, the recommendation engine and the web layer.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ContentCategory(Enum):
    """Fixed set of content categories."""

    TALE = "conte"
    PROVERB = "proverbe"
    SONG = "chant"
    DANCE = "danse"
    CRAFT = "artisanat"
    RIDDLE = "devinette"

    @classmethod
    def is_valid(cls, category: str) -> bool:
        """Check if a category string is valid."""
        try:
            cls(category)
            return True
        except ValueError:
            return False

    @classmethod
    def get_allowed_types(cls) -> set[str]:
        """Get all allowed category strings."""
        return {c.value for c in cls}


class MalformedItemError(ValueError):
    """Raised when a payload cannot be turned into a ContentItem."""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class ContentItem(BaseModel):
    """One cultural artifact."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: str = Field(min_length=1, description="Stable opaque identifier")
    category: str = Field(description="One of the ContentCategory values")
    title: Optional[str] = Field(default=None, description="Display title")
    description: Optional[str] = Field(default=None, description="Short description or meaning")
    origin: Optional[str] = Field(default=None, description="Cultural or geographic provenance")
    artist: Optional[str] = Field(default=None, description="Creator or performer")
    tags: Tuple[str, ...] = Field(default=(), description="Unique free-text labels")
    likes: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _check_category(cls, value: Any) -> Any:
        if isinstance(value, ContentCategory):
            return value.value
        if not isinstance(value, str):
            return value
        clean = value.strip().lower()
        if not ContentCategory.is_valid(clean):
            raise ValueError(f"unknown category '{value}'")
        return clean

    @field_validator("origin", "artist", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _unique_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        seen = []
        for tag in value:
            if not isinstance(tag, str):
                continue
            clean = tag.strip()
            if clean and clean not in seen:
                seen.append(clean)
        return tuple(seen)

    @field_validator("likes", "views", mode="before")
    @classmethod
    def _none_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("created_at", mode="before")
    @classmethod
    def _empty_timestamp(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_payload(cls, payload: Any) -> "ContentItem":
        """Validate a raw mapping (or pass through an existing item).

        Raises:
            MalformedItemError: If required fields are missing or invalid.
        """
        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            raise MalformedItemError(
                f"content item must be a mapping, got {type(payload).__name__}",
                payload=payload,
            )
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'item'}: {err['msg']}"
                for err in exc.errors()
            )
            raise MalformedItemError(
                f"malformed content item {payload.get('id')!r}: {problems}",
                payload=payload,
            ) from exc

    @property
    def created_timestamp(self) -> Optional[float]:
        """POSIX timestamp of created_at, if known."""
        return self.created_at.timestamp() if self.created_at else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (camelCase wire names)."""
        return self.model_dump(mode="json", by_alias=True)
