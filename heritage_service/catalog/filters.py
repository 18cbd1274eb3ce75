"""
Museum browsing filters: free-text search and category selection.
"""

from typing import Dict, List, Optional, Sequence

from heritage_service.models import ContentCategory, ContentItem

ALL_CATEGORIES = "all"


def _matches(item: ContentItem, needle: str) -> bool:
    for text in (item.title, item.description):
        if text and needle in text.lower():
            return True
    return False


def filter_items(
    items: Sequence[ContentItem],
    search_term: Optional[str] = "",
    category: Optional[str] = ALL_CATEGORIES,
) -> List[ContentItem]:
    """
    Filter items by search term and category.

    Args:
        items: Catalog to filter
        search_term: Case-insensitive substring matched against title or description
        category: A ContentCategory value, or "all" to keep every category

    Returns:
        Matching items in catalog order
    """
    filtered = list(items)

    needle = (search_term or "").strip().lower()
    if needle:
        filtered = [item for item in filtered if _matches(item, needle)]

    wanted = (category or ALL_CATEGORIES).strip().lower()
    if wanted != ALL_CATEGORIES:
        filtered = [item for item in filtered if item.category == wanted]

    return filtered


def category_counts(items: Sequence[ContentItem]) -> Dict[str, int]:
    """Count items per category; every known category is present."""
    counts = {category.value: 0 for category in ContentCategory}
    for item in items:
        counts[item.category] = counts.get(item.category, 0) + 1
    return counts
