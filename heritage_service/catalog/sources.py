"""
Catalog sources.

Provides the bundled static catalog and a client for the cultural content
API. When the API cannot be reached the client serves the static catalog so
browsing and recommendations keep working.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from heritage_service.models import ContentItem, parse_items

from .aggregator import SOURCES, aggregate_catalog, get_source

_LOG = logging.getLogger(__name__)

STATIC_CATALOG_PATH = Path(__file__).parent / "static_content.json"


def load_static_catalog(path: Optional[Union[str, Path]] = None) -> List[ContentItem]:
    """
    Load a catalog stored as JSON.

    The file holds either a list of items or an object with an ``items`` list.

    Args:
        path: Catalog file; defaults to the bundled static content

    Returns:
        Validated catalog (malformed entries skipped)
    """
    catalog_path = Path(path) if path else STATIC_CATALOG_PATH
    with open(catalog_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    entries = data.get("items", []) if isinstance(data, dict) else data
    catalog = parse_items(entries, label=f"catalog {catalog_path.name}")
    _LOG.debug("Loaded %d items from %s", len(catalog), catalog_path)
    return catalog


def build_session(proxy_url: Optional[str] = None) -> requests.Session:
    """Build a requests session with optional proxy configuration."""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    if proxy_url:
        _LOG.info("Using proxy: %s", proxy_url)
        session.proxies.update({"http": proxy_url, "https": proxy_url})
    return session


class ContentApiClient:
    """Fetches every content source from the API and aggregates them."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        fallback_path: Optional[Union[str, Path]] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.session = session or build_session()
        self.fallback_path = fallback_path

    def fetch_source(self, source: str) -> List[Dict[str, Any]]:
        """
        Download the raw records of one source.

        Raises:
            requests.exceptions.RequestException: On network or HTTP errors
            ValueError: On an unknown source or an unexpected response body
        """
        spec = get_source(source)
        url = f"{self.base_url}/cultural-content/{spec.endpoint}"
        _LOG.debug("Fetching %s from %s", spec.key, url)
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        body = resp.json()

        data = body.get("data") if isinstance(body, dict) else None
        records = data.get(spec.key) if isinstance(data, dict) else None
        if not isinstance(records, list):
            raise ValueError(f"Unexpected response body from {url}")
        return records

    def fetch_catalog(self) -> List[ContentItem]:
        """Fetch all sources in parallel; serve the static catalog on failure."""
        if not self.base_url:
            return load_static_catalog(self.fallback_path)

        try:
            with ThreadPoolExecutor(max_workers=len(SOURCES)) as executor:
                results = list(executor.map(self.fetch_source, [s.key for s in SOURCES]))
        except (requests.exceptions.RequestException, ValueError) as exc:
            _LOG.warning("Content API unavailable (%s), serving static catalog", exc)
            return load_static_catalog(self.fallback_path)

        payloads = {spec.key: records for spec, records in zip(SOURCES, results)}
        return aggregate_catalog(payloads)
