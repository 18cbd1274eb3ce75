"""
Ranking strategies for cultural content.

Each strategy selects its candidates from the catalog and maps every
candidate to a score; the engine takes care of ordering and truncation.
The weight constants below are the whole tunable surface of the scoring
model and must keep their exact values.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from heritage_service.models import ContentItem

from .base import RecommendationContext, ScoredItems, StrategyName


POPULAR_LIKES_WEIGHT = 0.4
POPULAR_VIEWS_WEIGHT = 0.6

PERSONALIZED_CATEGORY_WEIGHT = 0.40
PERSONALIZED_ORIGIN_WEIGHT = 0.20
PERSONALIZED_TAG_WEIGHT = 0.25
PERSONALIZED_ARTIST_WEIGHT = 0.15

SIMILAR_CATEGORY_WEIGHT = 0.40
SIMILAR_ORIGIN_WEIGHT = 0.30
SIMILAR_TAG_WEIGHT = 0.30

TRENDING_RECENCY_WEIGHT = 0.6
TRENDING_INTERACTION_WEIGHT = 0.4
TRENDING_WINDOW_DAYS = 30
TRENDING_VIEW_FACTOR = 0.1

_SECONDS_PER_DAY = 24 * 60 * 60


# ---------------------------------------------------------------------------
# Preference profile
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PreferenceProfile:
    """Occurrence counts aggregated over a user's interaction history."""

    category_counts: Dict[str, int] = field(default_factory=dict)
    origin_counts: Dict[str, int] = field(default_factory=dict)
    tag_counts: Dict[str, int] = field(default_factory=dict)
    artist_counts: Dict[str, int] = field(default_factory=dict)
    total_interactions: int = 0

    @classmethod
    def from_history(cls, history: Sequence[ContentItem]) -> "PreferenceProfile":
        categories: Counter = Counter()
        origins: Counter = Counter()
        tags: Counter = Counter()
        artists: Counter = Counter()

        for entry in history:
            categories[entry.category] += 1
            if entry.origin:
                origins[entry.origin] += 1
            for tag in entry.tags:
                tags[tag] += 1
            if entry.artist:
                artists[entry.artist] += 1

        return cls(
            category_counts=dict(categories),
            origin_counts=dict(origins),
            tag_counts=dict(tags),
            artist_counts=dict(artists),
            total_interactions=len(history),
        )


# ---------------------------------------------------------------------------
# Per-item scoring functions
# ---------------------------------------------------------------------------


def popularity_score(item: ContentItem) -> float:
    return item.likes * POPULAR_LIKES_WEIGHT + item.views * POPULAR_VIEWS_WEIGHT


def preference_score(item: ContentItem, profile: PreferenceProfile) -> float:
    """Weighted match of an item against a preference profile."""
    total = profile.total_interactions
    if total <= 0:
        return 0.0

    score = (profile.category_counts.get(item.category, 0) / total) * PERSONALIZED_CATEGORY_WEIGHT

    if item.origin and item.origin in profile.origin_counts:
        score += (profile.origin_counts[item.origin] / total) * PERSONALIZED_ORIGIN_WEIGHT

    if item.tags:
        matches = sum(1 for tag in item.tags if tag in profile.tag_counts)
        score += (matches / len(item.tags)) * PERSONALIZED_TAG_WEIGHT

    if item.artist and item.artist in profile.artist_counts:
        score += (profile.artist_counts[item.artist] / total) * PERSONALIZED_ARTIST_WEIGHT

    return score


def content_similarity(
    item: ContentItem, reference: ContentItem, null_origin_matches: bool = False
) -> float:
    """Category, origin and tag-overlap similarity between two items."""
    score = 0.0
    if item.category == reference.category:
        score += SIMILAR_CATEGORY_WEIGHT

    if item.origin is None and reference.origin is None:
        if null_origin_matches:
            score += SIMILAR_ORIGIN_WEIGHT
    elif item.origin == reference.origin:
        score += SIMILAR_ORIGIN_WEIGHT

    item_tags = set(item.tags)
    reference_tags = set(reference.tags)
    union = item_tags | reference_tags
    if union:
        score += (len(item_tags & reference_tags) / len(union)) * SIMILAR_TAG_WEIGHT

    return score


def trending_score(item: ContentItem, now: datetime) -> float:
    """Linear 30-day recency decay blended with raw interaction volume."""
    recency = 0.0
    if item.created_at is not None:
        # Future timestamps count as brand new.
        age_days = max((now - item.created_at).total_seconds() / _SECONDS_PER_DAY, 0.0)
        recency = max(0.0, 1 - age_days / TRENDING_WINDOW_DAYS)
    interaction = item.likes + item.views * TRENDING_VIEW_FACTOR
    return recency * TRENDING_RECENCY_WEIGHT + interaction * TRENDING_INTERACTION_WEIGHT


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class PopularStrategy:
    """Likes and views over the full, unfiltered catalog."""

    name = StrategyName.POPULAR.value

    def applies(self, context: RecommendationContext) -> bool:
        return True

    def score(self, catalog: Sequence[ContentItem], context: RecommendationContext) -> ScoredItems:
        return [(item, popularity_score(item)) for item in catalog]


class PersonalizedStrategy:
    """Ranks unseen items by how well they match the user's history."""

    name = StrategyName.PERSONALIZED.value

    def applies(self, context: RecommendationContext) -> bool:
        return bool(context.history)

    def score(self, catalog: Sequence[ContentItem], context: RecommendationContext) -> ScoredItems:
        profile = PreferenceProfile.from_history(context.history)
        seen_ids = {entry.id for entry in context.history}
        return [
            (item, preference_score(item, profile))
            for item in catalog
            if item.id not in seen_ids
        ]


class SimilarStrategy:
    """Ranks items by similarity to the item currently being viewed.

    Two items that both lack an origin only count as an origin match when
    ``null_origin_matches`` is enabled.
    """

    name = StrategyName.SIMILAR.value

    def __init__(self, null_origin_matches: bool = False):
        self.null_origin_matches = null_origin_matches

    def applies(self, context: RecommendationContext) -> bool:
        return context.current_item is not None

    def score(self, catalog: Sequence[ContentItem], context: RecommendationContext) -> ScoredItems:
        reference = context.current_item
        return [
            (item, content_similarity(item, reference, self.null_origin_matches))
            for item in catalog
            if item.id != reference.id
        ]


class RecentStrategy:
    """Newest items first; the score is the creation timestamp.

    Undated items get no score so the engine ranks them after every dated item,
    including dates before the epoch.
    """

    name = StrategyName.RECENT.value

    def applies(self, context: RecommendationContext) -> bool:
        return True

    def score(self, catalog: Sequence[ContentItem], context: RecommendationContext) -> ScoredItems:
        return [(item, item.created_timestamp) for item in catalog]


class TrendingStrategy:
    """Recent items with strong interaction counts."""

    name = StrategyName.TRENDING.value

    def __init__(self, now: Optional[datetime] = None):
        self.now = now

    def applies(self, context: RecommendationContext) -> bool:
        return True

    def score(self, catalog: Sequence[ContentItem], context: RecommendationContext) -> ScoredItems:
        now = context.now or self.now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return [(item, trending_score(item, now)) for item in catalog]
