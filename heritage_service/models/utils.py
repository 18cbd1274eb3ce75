"""
Utility functions for turning raw payloads into validated content items.
"""

import logging
from typing import Any, Iterable, List

from .content_models import ContentItem, MalformedItemError

_LOG = logging.getLogger(__name__)


def parse_items(
    payloads: Iterable[Any], label: str = "catalog", dedupe: bool = True
) -> List[ContentItem]:
    """Validate a collection of items, skipping malformed and duplicate entries.

    Malformed entries and repeated ids are logged as warnings and dropped so a
    partially bad source does not fail the whole request. The first occurrence
    of an id wins.

    Args:
        payloads: Raw mappings or ContentItem instances
        label: Name used in log messages ("catalog", "history", ...)
        dedupe: Drop entries whose id was already seen

    Returns:
        Validated items in input order
    """
    items: List[ContentItem] = []
    seen_ids = set()
    for position, payload in enumerate(payloads or []):
        try:
            item = ContentItem.from_payload(payload)
        except MalformedItemError as exc:
            _LOG.warning("Skipping %s entry #%d: %s", label, position, exc)
            continue
        if dedupe and item.id in seen_ids:
            _LOG.warning("Skipping %s entry #%d: duplicate id %r", label, position, item.id)
            continue
        seen_ids.add(item.id)
        items.append(item)
    return items
