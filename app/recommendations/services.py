"""
Recommendation service wiring the engine to the catalog snapshot.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

from heritage_service.recommendations import (
    RankedItem,
    RecommendationContext,
    RecommendationEngine,
)

_LOG = logging.getLogger(__name__)


class RecommendationService:
    """Ranks either a caller-supplied catalog or the service catalog."""

    def __init__(self, engine: RecommendationEngine, catalog_service):
        """
        Initialize RecommendationService.

        Args:
            engine: Configured RecommendationEngine
            catalog_service: CatalogService providing the default catalog
        """
        self.engine = engine
        self.catalog_service = catalog_service

    def recommend(
        self,
        strategy: Any,
        current_item: Optional[Any] = None,
        history: Optional[Sequence[Any]] = None,
        catalog: Optional[Sequence[Any]] = None,
        now: Optional[datetime] = None,
    ) -> List[RankedItem]:
        """Rank with an explicit context; uses the service catalog when none is given."""
        if catalog is None:
            catalog = self.catalog_service.get_catalog()
        context = RecommendationContext(
            current_item=current_item,
            history=list(history or []),
            now=now,
        )
        return self.engine.rank(catalog, strategy, context)

    def recommend_by_ids(
        self,
        strategy: Any,
        current_id: Optional[str] = None,
        history_ids: Iterable[str] = (),
    ) -> List[RankedItem]:
        """Rank the service catalog, resolving the context from item ids.

        Unknown ids are ignored, which makes the strategy fall back to
        popular when nothing usable remains.
        """
        catalog = self.catalog_service.get_catalog()
        by_id = {item.id: item for item in catalog}

        current = by_id.get(current_id) if current_id else None
        if current_id and current is None:
            _LOG.debug("Unknown current item id %r", current_id)

        history = [by_id[item_id] for item_id in history_ids if item_id in by_id]
        return self.recommend(strategy, current_item=current, history=history, catalog=catalog)
