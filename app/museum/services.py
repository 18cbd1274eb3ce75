"""
Catalog service holding the current catalog snapshot.
"""
import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional

from heritage_service.catalog import ContentApiClient, category_counts, filter_items
from heritage_service.models import ContentItem

_LOG = logging.getLogger(__name__)


class CatalogService:
    """Lazily loads the catalog from its source and hands out snapshots."""

    def __init__(self, client: ContentApiClient):
        """
        Initialize CatalogService.

        Args:
            client: ContentApiClient used to (re)load the catalog
        """
        self.client = client
        self._catalog: Optional[List[ContentItem]] = None
        self._loaded_at: Optional[datetime] = None
        self._lock = Lock()

    def get_catalog(self) -> List[ContentItem]:
        """Return a snapshot of the catalog, loading it on first use."""
        with self._lock:
            if self._catalog is None:
                self._load()
            return list(self._catalog)

    def refresh(self) -> int:
        """Reload the catalog from its source; returns the new size."""
        with self._lock:
            self._load()
            return len(self._catalog)

    def _load(self) -> None:
        self._catalog = self.client.fetch_catalog()
        self._loaded_at = datetime.now(timezone.utc)
        _LOG.info("Catalog loaded with %d items", len(self._catalog))

    @property
    def loaded_at(self) -> Optional[datetime]:
        return self._loaded_at

    def get_item(self, item_id: str) -> Optional[ContentItem]:
        for item in self.get_catalog():
            if item.id == item_id:
                return item
        return None

    def search(self, search_term: str = "", category: str = "all") -> List[ContentItem]:
        return filter_items(self.get_catalog(), search_term=search_term, category=category)

    def get_category_counts(self) -> Dict[str, int]:
        return category_counts(self.get_catalog())
