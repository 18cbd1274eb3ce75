"""
Recommendation engine package for ranking cultural content.

Provides a pluggable engine that can be reused by the web layer, batch jobs,
or any future tooling without creating Flask dependencies.
"""

from .base import (
    CatalogTooLargeError,
    InvalidStrategyError,
    RankedItem,
    RecommendationContext,
    RecommendationStrategy,
    StrategyName,
)
from .engine import DEFAULT_LIMIT, RecommendationEngine, build_default_engine
from .strategies import (
    PersonalizedStrategy,
    PopularStrategy,
    PreferenceProfile,
    RecentStrategy,
    SimilarStrategy,
    TrendingStrategy,
    content_similarity,
    popularity_score,
    preference_score,
    trending_score,
)

__all__ = [
    "CatalogTooLargeError",
    "DEFAULT_LIMIT",
    "InvalidStrategyError",
    "PersonalizedStrategy",
    "PopularStrategy",
    "PreferenceProfile",
    "RankedItem",
    "RecentStrategy",
    "RecommendationContext",
    "RecommendationEngine",
    "RecommendationStrategy",
    "SimilarStrategy",
    "StrategyName",
    "TrendingStrategy",
    "build_default_engine",
    "content_similarity",
    "popularity_score",
    "preference_score",
    "trending_score",
]
