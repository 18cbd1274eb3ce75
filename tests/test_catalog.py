"""
Tests for catalog aggregation, museum filters and catalog sources.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest
import requests

from heritage_service.catalog import (
    ContentApiClient,
    STATIC_CATALOG_PATH,
    aggregate_catalog,
    category_counts,
    filter_items,
    load_static_catalog,
    normalize_record,
)
from heritage_service.models import ContentItem, MalformedItemError


SOURCE_PAYLOADS = {
    "tales": [
        {
            "id": "real-conte-1",
            "title": "La Sagesse de Mami Wata",
            "content": "Mami Wata, la déesse des eaux...",
            "description": "Conte Yoruba",
            "region": "Nigeria - Peuple Yoruba",
            "moral": "La sagesse et la discrétion sont des vertus précieuses",
            "tags": ["Yoruba", "sagesse"],
            "createdAt": "2024-03-02T09:00:00Z",
        }
    ],
    "proverbs": [
        {"text": "La patience est la clé de la réussite", "meaning": "Persévérer", "culture": "Bambara"}
    ],
    "riddles": [
        {"question": "Qui suis-je ?", "answer": "La bougie"}
    ],
    "music": [
        {"title": "Chant de Récolte", "description": "Chant Bambara", "origin": "Mali",
         "artist": "Griots", "likes": 3, "views": 40}
    ],
    "dances": [
        {"id": 7, "title": "Danse Zaouli", "description": "Danse masquée Gouro"}
    ],
    "art": [
        {"title": "Tissu Kente", "description": "Tissu royal", "origin": "Ghana", "imageUrl": "https://img"}
    ],
}


class TestNormalizeRecord:
    """Test per-source field mapping."""

    def test_tale_mapping(self):
        payload = normalize_record("tales", SOURCE_PAYLOADS["tales"][0])
        assert payload["id"] == "tale-La Sagesse de Mami Wata"
        assert payload["category"] == "conte"
        assert payload["description"] == "Mami Wata, la déesse des eaux..."
        assert payload["origin"] == "Nigeria - Peuple Yoruba"
        assert payload["sourceId"] == "real-conte-1"
        assert payload["moral"].startswith("La sagesse")

    def test_proverb_and_riddle_mapping(self):
        proverb = normalize_record("proverbs", SOURCE_PAYLOADS["proverbs"][0])
        assert proverb["id"] == "proverb-La patience est la clé de la réussite"
        assert proverb["title"] == "La patience est la clé de la réussite"
        assert proverb["description"] == "Persévérer"
        assert proverb["origin"] == "Bambara"

        riddle = normalize_record("riddles", SOURCE_PAYLOADS["riddles"][0])
        assert riddle["id"] == "riddle-Qui suis-je ?"
        assert riddle["category"] == "devinette"
        assert riddle["description"] == "La bougie"

    def test_dance_prefers_source_id(self):
        dance = normalize_record("dances", SOURCE_PAYLOADS["dances"][0])
        assert dance["id"] == "dance-7"
        assert dance["category"] == "danse"

    def test_record_without_id_basis(self):
        payload = normalize_record("music", {"description": "untitled"})
        assert payload["id"] is None
        with pytest.raises(MalformedItemError):
            ContentItem.from_payload(payload)

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            normalize_record("poems", {"title": "x"})

    def test_non_mapping_record(self):
        with pytest.raises(MalformedItemError):
            normalize_record("art", "Tissu Kente")


class TestAggregateCatalog:
    """Test merging sources into one catalog."""

    def test_merges_all_sources_in_fixed_order(self):
        shuffled = dict(reversed(list(SOURCE_PAYLOADS.items())))
        catalog = aggregate_catalog(shuffled)
        assert [item.category for item in catalog] == [
            "conte", "proverbe", "devinette", "chant", "danse", "artisanat",
        ]
        music = catalog[3]
        assert music.artist == "Griots"
        assert music.likes == 3
        assert catalog[5].to_dict()["imageUrl"] == "https://img"

    def test_skips_malformed_and_duplicate_records(self, caplog):
        payloads = {
            "tales": [
                {"title": "Le Baobab"},
                {"title": "Le Baobab", "content": "doublon"},
                "broken",
                {"content": "sans titre"},
            ]
        }
        with caplog.at_level(logging.WARNING):
            catalog = aggregate_catalog(payloads)
        assert [item.id for item in catalog] == ["tale-Le Baobab"]
        assert len(caplog.records) == 3

    def test_missing_sources_are_empty(self):
        assert aggregate_catalog({}) == []
        assert len(aggregate_catalog({"art": SOURCE_PAYLOADS["art"], "music": None})) == 1

    def test_unknown_source_rejected(self):
        with pytest.raises(ValueError):
            aggregate_catalog({"poems": []})


class TestFilters:
    """Test museum search and category filters."""

    @pytest.fixture
    def items(self):
        return aggregate_catalog(SOURCE_PAYLOADS)

    def test_no_filters_returns_everything(self, items):
        assert filter_items(items) == items
        assert filter_items(items, search_term=None, category=None) == items

    def test_search_matches_title_or_description(self, items):
        assert [i.id for i in filter_items(items, search_term="KENTE")] == ["art-Tissu Kente"]
        assert [i.id for i in filter_items(items, search_term="bougie")] == ["riddle-Qui suis-je ?"]

    def test_category_filter(self, items):
        result = filter_items(items, category="chant")
        assert [i.category for i in result] == ["chant"]
        assert filter_items(items, category="opera") == []

    def test_search_and_category_combined(self, items):
        assert filter_items(items, search_term="bambara", category="chant")[0].id == "music-Chant de Récolte"
        assert filter_items(items, search_term="bambara", category="conte") == []

    def test_category_counts(self, items):
        counts = category_counts(items)
        assert counts == {
            "conte": 1, "proverbe": 1, "chant": 1, "danse": 1, "artisanat": 1, "devinette": 1,
        }
        assert category_counts([])["conte"] == 0


class TestStaticCatalog:
    """Test loading catalogs from JSON files."""

    def test_bundled_catalog_is_valid(self):
        catalog = load_static_catalog()
        assert len(catalog) >= 10
        assert len({item.id for item in catalog}) == len(catalog)
        assert STATIC_CATALOG_PATH.exists()

    def test_custom_file_as_list(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([
            {"id": "a", "category": "conte"},
            {"id": "b"},
        ]), encoding="utf-8")
        assert [item.id for item in load_static_catalog(path)] == ["a"]

    def test_custom_file_as_object(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"items": [{"id": "a", "category": "chant"}]}), encoding="utf-8")
        assert load_static_catalog(str(path))[0].category == "chant"


def _response(body, status=200):
    resp = MagicMock()
    resp.json.return_value = body
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} error")
    else:
        resp.raise_for_status.return_value = None
    return resp


class TestContentApiClient:
    """Test the content API client with a mocked session."""

    def _session_for(self, payloads):
        def fake_get(url, timeout):
            for key, endpoint in [
                ("tales", "tales"), ("proverbs", "proverbs"), ("riddles", "cultural-riddles"),
                ("music", "music"), ("dances", "dances"), ("art", "art"),
            ]:
                if url.endswith(f"/cultural-content/{endpoint}"):
                    return _response({"success": True, "data": {key: payloads.get(key, [])}})
            raise AssertionError(f"unexpected url {url}")

        session = MagicMock()
        session.get.side_effect = fake_get
        return session

    def test_fetch_source(self):
        session = self._session_for(SOURCE_PAYLOADS)
        client = ContentApiClient("http://api.test/api/", timeout=3, session=session)
        records = client.fetch_source("riddles")
        assert records == SOURCE_PAYLOADS["riddles"]
        session.get.assert_called_once_with("http://api.test/api/cultural-content/cultural-riddles", timeout=3)

    def test_fetch_source_rejects_unexpected_body(self):
        session = MagicMock()
        session.get.return_value = _response({"data": {"wrong": []}})
        client = ContentApiClient("http://api.test", session=session)
        with pytest.raises(ValueError):
            client.fetch_source("tales")

    def test_fetch_catalog_aggregates_sources(self):
        client = ContentApiClient("http://api.test", session=self._session_for(SOURCE_PAYLOADS))
        catalog = client.fetch_catalog()
        assert len(catalog) == 6
        assert catalog[0].id == "tale-La Sagesse de Mami Wata"

    def test_network_error_serves_static_catalog(self, caplog):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("down")
        client = ContentApiClient("http://api.test", session=session)
        with caplog.at_level(logging.WARNING):
            catalog = client.fetch_catalog()
        assert [item.id for item in catalog] == [item.id for item in load_static_catalog()]
        assert any("static catalog" in r.getMessage() for r in caplog.records)

    def test_http_error_serves_fallback_file(self, tmp_path):
        path = tmp_path / "fallback.json"
        path.write_text(json.dumps([{"id": "only", "category": "danse"}]), encoding="utf-8")
        session = MagicMock()
        session.get.return_value = _response({}, status=503)
        client = ContentApiClient("http://api.test", session=session, fallback_path=path)
        assert [item.id for item in client.fetch_catalog()] == ["only"]

    def test_without_base_url_uses_static_catalog(self):
        session = MagicMock()
        client = ContentApiClient("", session=session)
        assert client.fetch_catalog()
        session.get.assert_not_called()
