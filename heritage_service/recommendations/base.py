"""
Core data structures shared by the recommendation engine and its strategies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from heritage_service.models import ContentItem


# ---------------------------------------------------------------------------
# Strategy names & errors
# ---------------------------------------------------------------------------


class StrategyName(Enum):
    """Supported ranking strategies."""

    PERSONALIZED = "personalized"
    SIMILAR = "similar"
    POPULAR = "popular"
    RECENT = "recent"
    TRENDING = "trending"

    @classmethod
    def is_valid(cls, name: str) -> bool:
        """Check if a strategy name string is valid."""
        try:
            cls(name)
            return True
        except ValueError:
            return False

    @classmethod
    def get_allowed_types(cls) -> set[str]:
        """Get all allowed strategy name strings."""
        return {s.value for s in cls}

    @classmethod
    def parse(cls, name: Any) -> "StrategyName":
        """Resolve a caller-supplied name, failing fast on unknown values."""
        if isinstance(name, cls):
            return name
        if isinstance(name, str) and cls.is_valid(name.strip().lower()):
            return cls(name.strip().lower())
        raise InvalidStrategyError(name)


class InvalidStrategyError(ValueError):
    """Raised when a caller requests a strategy outside StrategyName."""

    def __init__(self, strategy: Any):
        self.strategy = strategy
        allowed = ", ".join(s.value for s in StrategyName)
        super().__init__(f"Unknown recommendation strategy {strategy!r} (expected one of: {allowed})")


class CatalogTooLargeError(ValueError):
    """Raised when a catalog exceeds the configured maximum size."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Catalog of {size} items exceeds the maximum of {limit}")


# ---------------------------------------------------------------------------
# Context & results
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RecommendationContext:
    """Viewing context for one ranking call.

    ``current_item`` and ``history`` entries may be raw mappings; the engine
    validates them before any strategy sees them. ``now`` pins the clock used
    by time-dependent strategies (wall-clock UTC when omitted).
    """

    current_item: Optional[Any] = None
    history: Sequence[Any] = field(default_factory=list)
    now: Optional[datetime] = None


@dataclass(slots=True)
class RankedItem:
    """A content item with the score that placed it in the result."""

    item: ContentItem
    score: float
    strategy: str

    @property
    def id(self) -> str:
        return self.item.id

    def to_dict(self) -> Dict[str, Any]:
        """Item fields plus the ranking score."""
        data = self.item.to_dict()
        data["score"] = self.score
        return data


# A None score ranks after every scored item and is reported as 0.0
ScoredItems = List[Tuple[ContentItem, Optional[float]]]


class RecommendationStrategy(Protocol):
    """Interface for plug-and-play ranking strategies."""

    name: str

    def applies(self, context: RecommendationContext) -> bool:
        """Return False when the context lacks what the strategy needs."""

    def score(
        self, catalog: Sequence[ContentItem], context: RecommendationContext
    ) -> ScoredItems:
        """Select candidates from the catalog and score each of them."""
