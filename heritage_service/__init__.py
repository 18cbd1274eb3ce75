# Heritage service package: content models, catalog aggregation and recommendations

from .models import ContentCategory, ContentItem, MalformedItemError, parse_items
from .recommendations import (
    CatalogTooLargeError,
    InvalidStrategyError,
    RankedItem,
    RecommendationContext,
    RecommendationEngine,
    StrategyName,
    build_default_engine,
)
from .catalog import (
    ContentApiClient,
    aggregate_catalog,
    category_counts,
    filter_items,
    load_static_catalog,
)
from .logging_config import (
    setup_logging,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "ContentCategory",
    "ContentItem",
    "MalformedItemError",
    "parse_items",
    "CatalogTooLargeError",
    "InvalidStrategyError",
    "RankedItem",
    "RecommendationContext",
    "RecommendationEngine",
    "StrategyName",
    "build_default_engine",
    "ContentApiClient",
    "aggregate_catalog",
    "category_counts",
    "filter_items",
    "load_static_catalog",
    "setup_logging",
    "ThreadSafeLoggingConfig",
]
