"""Test doubles for catalog search collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from catalog_search.cache import CacheHit, CacheLookup, CacheMiss
from catalog_search.errors import CatalogError, ProviderError
from catalog_search.storage import CatalogEntry


class FakeEmbeddingProvider:
    """Returns queued or mapped vectors and records every call."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        *,
        default: list[float] | None = None,
        failures: int = 0,
    ) -> None:
        self.vectors = dict(vectors or {})
        self.default = default if default is not None else [1.0, 0.0]
        self.failures = failures
        self.calls: list[str] = []

    def embed_query(self, query: str) -> list[float]:
        self.calls.append(query)
        if self.failures > 0:
            self.failures -= 1
            raise ProviderError("embedding service unreachable")
        return list(self.vectors.get(query, self.default))


class StaticCatalog:
    """In-memory catalog store."""

    def __init__(self, entries: list[CatalogEntry], *, fail: bool = False) -> None:
        self.entries = entries
        self.fail = fail
        self.calls: list[int] = []

    def fetch_candidates(self, *, limit: int = 1000) -> list[CatalogEntry]:
        self.calls.append(limit)
        if self.fail:
            raise CatalogError("catalog unavailable")
        return [entry for entry in self.entries if entry.embedding][:limit]


class InMemoryCacheStore:
    """Dictionary-backed cache store; TTLs are recorded but not enforced."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.gets: list[str] = []
        self.sets: list[str] = []

    @property
    def enabled(self) -> bool:
        return True

    def get(self, key: str) -> CacheLookup:
        self.gets.append(key)
        if key in self.data:
            return CacheHit(value=self.data[key])
        return CacheMiss()

    def set(self, key: str, value: str, ttl: int) -> bool:
        self.sets.append(key)
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete_key(self, key: str) -> int:
        return 1 if self.data.pop(key, None) is not None else 0

    def delete_prefix(self, prefix: str) -> int:
        keys = [key for key in self.data if key.startswith(prefix)]
        for key in keys:
            del self.data[key]
        return len(keys)


# ---------------------------------------------------------------------------
# Fake Google GenAI client
# ---------------------------------------------------------------------------


@dataclass
class FakeEmbedding:
    values: list[float] | None


@dataclass
class FakeEmbedResult:
    embeddings: list[FakeEmbedding] | None


class FakeModels:
    """Records embed_content calls and replays a canned result or error."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def embed_content(self, *, model: str, contents: list[str], config: dict) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        dim = config.get("output_dimensionality", 3)
        return FakeEmbedResult(embeddings=[FakeEmbedding(values=[0.5] * dim)])


class FakeGenAIClient:
    def __init__(self, models: FakeModels | None = None) -> None:
        self.models = models or FakeModels()
