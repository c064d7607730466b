"""Tests for the search and cache-clear REST endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from catalog_search.cache import NullCacheStore
from catalog_search.errors import ProviderError
from catalog_search.search import SemanticSearchEngine
from catalog_search.server import app, get_cache_store, get_search_engine, get_settings
from fakes import FakeEmbeddingProvider, InMemoryCacheStore, StaticCatalog


SEARCH_URL = "/api/ai/yellow-books/search"
CACHE_URL = "/api/ai/yellow-books/cache"


@pytest.fixture()
def wired(abc_entries):
    """Override engine and cache dependencies; yield (client, cache, provider)."""
    cache = InMemoryCacheStore()
    provider = FakeEmbeddingProvider(default=[1.0, 0.0])
    engine = SemanticSearchEngine(StaticCatalog(abc_entries), provider, cache)
    app.dependency_overrides[get_search_engine] = lambda: engine
    app.dependency_overrides[get_cache_store] = lambda: cache
    try:
        yield TestClient(app), cache, provider
    finally:
        app.dependency_overrides.clear()


def test_search_returns_ranked_results(wired) -> None:
    client, _, _ = wired

    response = client.post(SEARCH_URL, json={"query": "fresh bread", "limit": 2})

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data] == ["a", "c"]
    assert [item["rank"] for item in data] == [0, 1]
    assert data[0]["similarity"] == pytest.approx(1.0)
    assert data[0]["name"] == "Alpha Bakery"
    assert data[0]["summary"] == "Bread"


def test_search_uses_cache_by_default(wired) -> None:
    client, cache, provider = wired

    client.post(SEARCH_URL, json={"query": "bread"})
    client.post(SEARCH_URL, json={"query": "bread"})

    assert provider.calls == ["bread"]
    assert "ai-search:bread" in cache.data


def test_search_use_cache_false(wired) -> None:
    client, cache, provider = wired

    client.post(SEARCH_URL, json={"query": "bread", "useCache": False})
    client.post(SEARCH_URL, json={"query": "bread", "useCache": False})

    assert provider.calls == ["bread", "bread"]
    assert cache.data == {}


@pytest.mark.parametrize("query", ["", "   ", "x" * 501])
def test_invalid_query_is_a_client_error(wired, query: str) -> None:
    client, _, _ = wired

    response = client.post(SEARCH_URL, json={"query": query})

    assert response.status_code == 400
    assert "error" in response.json()


def test_limit_outside_bounds_is_rejected(wired) -> None:
    client, _, provider = wired

    for limit in (0, 101):
        response = client.post(SEARCH_URL, json={"query": "bread", "limit": limit})

        assert response.status_code == 400
        assert "limit" in response.json()["error"]
    assert provider.calls == []


def test_missing_query_is_a_client_error(wired) -> None:
    client, _, _ = wired

    response = client.post(SEARCH_URL, json={"limit": 3})

    assert response.status_code == 400
    assert "query" in response.json()["error"]


def test_provider_failure_is_reported(wired) -> None:
    client, _, provider = wired
    provider.failures = 1

    response = client.post(SEARCH_URL, json={"query": "bread"})

    assert response.status_code == 400
    assert response.json() == {"error": "embedding service unreachable"}


def test_engine_construction_failure_is_reported() -> None:
    def _no_engine():
        raise ProviderError("GOOGLE_API_KEY not found.")

    app.dependency_overrides[get_search_engine] = _no_engine
    try:
        response = TestClient(app).post(SEARCH_URL, json={"query": "bread"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 400
    assert "GOOGLE_API_KEY" in response.json()["error"]


def test_clear_cache_for_one_query(wired) -> None:
    client, cache, _ = wired
    client.post(SEARCH_URL, json={"query": "bread"})
    client.post(SEARCH_URL, json={"query": "coffee"})

    response = client.delete(CACHE_URL, params={"query": "bread"})

    assert response.status_code == 200
    assert response.json() == {"message": "Cache cleared for query: bread"}
    assert list(cache.data) == ["ai-search:coffee"]


def test_clear_all_cache(wired) -> None:
    client, cache, _ = wired
    client.post(SEARCH_URL, json={"query": "bread"})
    client.post(SEARCH_URL, json={"query": "coffee"})

    response = client.delete(CACHE_URL)

    assert response.status_code == 200
    assert response.json() == {"message": "All cache cleared (2 keys)"}
    assert cache.data == {}


def test_clear_cache_when_disabled() -> None:
    app.dependency_overrides[get_cache_store] = NullCacheStore
    try:
        response = TestClient(app).delete(CACHE_URL)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json() == {"message": "Cache is disabled; nothing to clear."}


def test_health_reports_cache_state(wired) -> None:
    client, _, _ = wired

    response = client.get("/health")

    assert response.json() == {"status": "ok", "cache_enabled": True}


def test_clear_blank_query_keeps_cache(wired) -> None:
    client, cache, _ = wired
    client.post(SEARCH_URL, json={"query": "bread"})

    response = client.delete(CACHE_URL, params={"query": "   "})

    assert response.status_code == 200
    assert response.json() == {"message": "Query is blank; nothing was cleared."}
    assert list(cache.data) == ["ai-search:bread"]


def test_clear_cache_with_malformed_redis_port(monkeypatch) -> None:
    monkeypatch.setenv("REDIS_HOST", "redis.internal")
    monkeypatch.setenv("REDIS_PORT", "abc")
    get_settings.cache_clear()
    get_cache_store.cache_clear()
    try:
        response = TestClient(app).delete(CACHE_URL)
    finally:
        get_settings.cache_clear()
        get_cache_store.cache_clear()

    assert response.status_code == 200
    assert response.json() == {"message": "Cache is disabled; nothing to clear."}
