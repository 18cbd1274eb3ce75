"""
Catalog package: source aggregation, museum filters and catalog loading.
"""

from .aggregator import (
    SOURCES,
    ContentSource,
    aggregate_catalog,
    get_source,
    normalize_record,
)
from .filters import ALL_CATEGORIES, category_counts, filter_items
from .sources import (
    STATIC_CATALOG_PATH,
    ContentApiClient,
    build_session,
    load_static_catalog,
)

__all__ = [
    "ALL_CATEGORIES",
    "SOURCES",
    "STATIC_CATALOG_PATH",
    "ContentApiClient",
    "ContentSource",
    "aggregate_catalog",
    "build_session",
    "category_counts",
    "filter_items",
    "get_source",
    "load_static_catalog",
    "normalize_record",
]
