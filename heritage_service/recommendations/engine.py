"""
Reusable recommendation engine.

This module intentionally lives inside heritage_service/ so it can be shared
by the web application, batch jobs, or any future CLI tooling without
introducing Flask dependencies. The engine holds configuration only; every
ranking call is a pure function of its inputs (plus the clock for trending).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from heritage_service.models import ContentItem, MalformedItemError, parse_items

from .base import (
    CatalogTooLargeError,
    InvalidStrategyError,
    RankedItem,
    RecommendationContext,
    RecommendationStrategy,
    StrategyName,
)
from .strategies import (
    PersonalizedStrategy,
    PopularStrategy,
    RecentStrategy,
    SimilarStrategy,
    TrendingStrategy,
)

_LOG = logging.getLogger(__name__)

DEFAULT_LIMIT = 6


def _sort_key(pair: Tuple[ContentItem, Optional[float]]) -> Tuple[bool, float]:
    score = pair[1]
    return (score is not None, 0.0 if score is None else score)


class RecommendationEngine:
    """Dispatches to one strategy per call, then sorts and truncates."""

    def __init__(
        self,
        strategies: Sequence[RecommendationStrategy],
        limit: int = DEFAULT_LIMIT,
        max_catalog_size: Optional[int] = None,
    ):
        if not strategies:
            raise ValueError("At least one recommendation strategy is required.")
        if limit < 1:
            raise ValueError("limit must be a positive integer.")

        self.strategies: Dict[StrategyName, RecommendationStrategy] = {}
        for strategy in strategies:
            self.strategies[StrategyName.parse(strategy.name)] = strategy
        if StrategyName.POPULAR not in self.strategies:
            raise ValueError("The popular strategy is required as the fallback strategy.")

        self.limit = limit
        self.max_catalog_size = max_catalog_size

    def rank(
        self,
        catalog: Iterable[Any],
        strategy: Any,
        context: Optional[RecommendationContext] = None,
    ) -> List[RankedItem]:
        """Rank a catalog snapshot with the named strategy.

        Args:
            catalog: ContentItem instances or raw mappings; malformed entries
                are skipped with a warning
            strategy: A StrategyName or its string value
            context: Current item, interaction history and optional clock

        Returns:
            At most ``limit`` ranked items, best first. Equal scores keep
            catalog order.

        Raises:
            InvalidStrategyError: If the strategy is unknown or not registered
            CatalogTooLargeError: If the catalog exceeds ``max_catalog_size``
        """
        name = StrategyName.parse(strategy)
        selected = self.strategies.get(name)
        if selected is None:
            raise InvalidStrategyError(strategy)

        entries = list(catalog or [])
        if self.max_catalog_size is not None and len(entries) > self.max_catalog_size:
            raise CatalogTooLargeError(len(entries), self.max_catalog_size)

        items = parse_items(entries, label="catalog")
        if not items:
            return []

        resolved = self._resolve_context(context or RecommendationContext())
        if not selected.applies(resolved):
            _LOG.debug("Strategy %s lacks context, falling back to popular", selected.name)
            selected = self.strategies[StrategyName.POPULAR]

        scored = selected.score(items, resolved)
        # sorted() is stable, also with reverse=True
        ordered = sorted(scored, key=_sort_key, reverse=True)
        results = [
            RankedItem(item=item, score=0.0 if score is None else score, strategy=selected.name)
            for item, score in ordered[: self.limit]
        ]
        _LOG.debug(
            "Ranked %d of %d items with %s", len(results), len(items), selected.name
        )
        return results

    # Internals ----------------------------------------------------------------

    def _resolve_context(self, context: RecommendationContext) -> RecommendationContext:
        """Validate context entries without touching the caller's object."""
        current: Optional[ContentItem] = None
        if context.current_item is not None:
            try:
                current = ContentItem.from_payload(context.current_item)
            except MalformedItemError as exc:
                _LOG.warning("Ignoring current item: %s", exc)

        history = parse_items(context.history or [], label="history", dedupe=False)
        return RecommendationContext(current_item=current, history=history, now=context.now)


def build_default_engine(
    limit: int = DEFAULT_LIMIT,
    max_catalog_size: Optional[int] = None,
    null_origin_matches: bool = False,
) -> RecommendationEngine:
    """Factory for the engine with all five strategies registered."""
    return RecommendationEngine(
        strategies=[
            PersonalizedStrategy(),
            SimilarStrategy(null_origin_matches=null_origin_matches),
            PopularStrategy(),
            RecentStrategy(),
            TrendingStrategy(),
        ],
        limit=limit,
        max_catalog_size=max_catalog_size,
    )
