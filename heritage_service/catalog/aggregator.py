"""
Multi-source content aggregation.

The content API exposes one endpoint per kind of content (tales, proverbs,
riddles, music, dances, art), each with its own field names. This module maps
every source record onto the ContentItem shape and merges the sources into a
single catalog snapshot.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from heritage_service.models import ContentCategory, ContentItem, MalformedItemError, parse_items

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentSource:
    """Description of one content endpoint and how to read its records."""

    key: str                            # key under the response's "data" object
    endpoint: str                       # path segment under /cultural-content/
    category: ContentCategory
    id_prefix: str
    id_fields: Tuple[str, ...]          # first non-empty value builds the id
    title_fields: Tuple[str, ...]
    description_fields: Tuple[str, ...]


SOURCES: Tuple[ContentSource, ...] = (
    ContentSource("tales", "tales", ContentCategory.TALE, "tale",
                  ("title",), ("title",), ("content", "description")),
    ContentSource("proverbs", "proverbs", ContentCategory.PROVERB, "proverb",
                  ("text", "title"), ("text", "title"), ("meaning", "description")),
    ContentSource("riddles", "cultural-riddles", ContentCategory.RIDDLE, "riddle",
                  ("question", "title"), ("question", "title"), ("answer", "description")),
    ContentSource("music", "music", ContentCategory.SONG, "music",
                  ("title",), ("title",), ("description",)),
    ContentSource("dances", "dances", ContentCategory.DANCE, "dance",
                  ("id", "title"), ("title",), ("description",)),
    ContentSource("art", "art", ContentCategory.CRAFT, "art",
                  ("title",), ("title",), ("description",)),
)

SOURCE_BY_KEY: Dict[str, ContentSource] = {source.key: source for source in SOURCES}

_ORIGIN_FIELDS = ("origin", "region", "culture")


def get_source(key: str) -> ContentSource:
    """Look up a source by key, raising ValueError for unknown keys."""
    try:
        return SOURCE_BY_KEY[key]
    except KeyError:
        allowed = ", ".join(SOURCE_BY_KEY)
        raise ValueError(f"Unknown content source '{key}' (expected one of: {allowed})") from None


def _first_value(record: Mapping, fields: Iterable[str]) -> Optional[Any]:
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def normalize_record(source: str, record: Any) -> Dict[str, Any]:
    """Map a raw source record onto the ContentItem payload shape.

    Fields the mapping does not consume (source, sourceUrl, moral, imageUrl,
    ...) are carried over untouched. The record's own ``id`` is kept as
    ``sourceId`` because catalog ids are rebuilt with a per-source prefix.

    Raises:
        ValueError: If the source key is unknown
        MalformedItemError: If the record is not a mapping
    """
    spec = get_source(source)
    if not isinstance(record, Mapping):
        raise MalformedItemError(
            f"{spec.key} record must be a mapping, got {type(record).__name__}",
            payload=record,
        )

    payload: Dict[str, Any] = dict(record)
    if "id" in payload:
        payload["sourceId"] = payload.pop("id")

    basis = _first_value(record, spec.id_fields)
    payload["id"] = f"{spec.id_prefix}-{basis}" if basis is not None else None
    payload["category"] = spec.category.value
    payload["title"] = _first_value(record, spec.title_fields)
    payload["description"] = _first_value(record, spec.description_fields)
    payload["origin"] = _first_value(record, _ORIGIN_FIELDS)
    payload["tags"] = record.get("tags") or []
    return payload


def aggregate_catalog(payloads: Mapping) -> List[ContentItem]:
    """Merge per-source record lists into one validated catalog.

    Sources are merged in the fixed SOURCES order regardless of the mapping's
    order. Malformed records are skipped with a warning; when two records map
    to the same id the first one wins.

    Args:
        payloads: Mapping of source key -> list of raw records

    Returns:
        Validated catalog
    """
    unknown = [key for key in payloads if key not in SOURCE_BY_KEY]
    if unknown:
        raise ValueError(f"Unknown content source(s): {', '.join(sorted(unknown))}")

    normalized: List[Dict[str, Any]] = []
    for spec in SOURCES:
        records = payloads.get(spec.key) or []
        for position, record in enumerate(records):
            try:
                normalized.append(normalize_record(spec.key, record))
            except MalformedItemError as exc:
                _LOG.warning("Skipping %s record #%d: %s", spec.key, position, exc)

    catalog = parse_items(normalized, label="catalog")
    _LOG.info("Aggregated %d items from %d sources", len(catalog), len(payloads))
    return catalog
