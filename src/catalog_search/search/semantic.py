"""
Vector-based semantic search engine with a read-through result cache.

Embeds a query, ranks catalog candidates by cosine similarity and caches
the ranked list under a key derived from the trimmed query. Cache failures
degrade to a fresh computation and never fail the search.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable

from ..cache import CacheHit, CacheStore, NullCacheStore
from ..embeddings import EmbeddingProvider
from ..errors import CacheError, ProviderError
from ..storage import CatalogStore
from .query import (
    CACHE_KEY_PREFIX,
    cache_key,
    decode_results,
    encode_results,
    normalize_query,
    validate_limit,
)
from .ranker import SearchResult, rank_candidates


logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_LIMIT = 1000
DEFAULT_CACHE_TTL = 3600

CACHE_DISABLED_MESSAGE = "Cache is disabled; nothing to clear."
CACHE_UNAVAILABLE_MESSAGE = "Cache backend unavailable; nothing was cleared."
BLANK_QUERY_MESSAGE = "Query is blank; nothing was cleared."


def invalidate_search_cache(cache: CacheStore, query: str | None = None) -> str:
    """Delete one cached query, or every cached search, and describe the outcome."""
    if not cache.enabled:
        return CACHE_DISABLED_MESSAGE

    clear_all = query is None or query == ""
    normalized = "" if clear_all else query.strip()
    if not clear_all and not normalized:
        # Blank queries are never cached, and must not widen to a full clear.
        return BLANK_QUERY_MESSAGE
    try:
        if not clear_all:
            cache.delete_key(cache_key(normalized))
            logger.info("Cleared cached search for %r", normalized)
            return f"Cache cleared for query: {normalized}"
        deleted = cache.delete_prefix(CACHE_KEY_PREFIX)
    except CacheError as exc:
        logger.warning("Cache clear failed: %s", exc)
        return CACHE_UNAVAILABLE_MESSAGE
    logger.info("Cleared %d cached searches", deleted)
    return f"All cache cleared ({deleted} keys)"


class SemanticSearchEngine:
    """Embed a query, rank catalog candidates and cache the result."""

    def __init__(
        self,
        catalog: CatalogStore,
        embedding_provider: EmbeddingProvider,
        cache: CacheStore | None = None,
        *,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        provider_retries: int = 0,
        coalesce: bool = True,
    ) -> None:
        self.catalog = catalog
        self.embedding_provider = embedding_provider
        self.cache = cache or NullCacheStore()
        self.candidate_limit = candidate_limit
        self.cache_ttl = cache_ttl
        self.provider_retries = max(provider_retries, 0)
        self.coalesce = coalesce
        self._inflight: dict[tuple[str, int], Future] = {}
        self._inflight_lock = threading.Lock()

    def search(
        self,
        query: str,
        *,
        limit: int = 5,
        use_cache: bool = True,
    ) -> list[SearchResult]:
        """Return up to *limit* entries ranked by similarity to *query*."""
        normalized = normalize_query(query)
        validate_limit(limit)

        if not use_cache:
            return self._compute(normalized, limit)

        key = cache_key(normalized)
        cached = self._read_cache(key, limit)
        if cached is not None:
            return cached

        if not self.coalesce:
            return self._compute_and_store(normalized, key, limit)
        return self._single_flight(
            (key, limit), lambda: self._compute_and_store(normalized, key, limit)
        )

    def invalidate(self, query: str | None = None) -> str:
        return invalidate_search_cache(self.cache, query)

    def _read_cache(self, key: str, limit: int) -> list[SearchResult] | None:
        if not self.cache.enabled:
            return None
        lookup = self.cache.get(key)
        if not isinstance(lookup, CacheHit):
            return None
        try:
            cached_limit, results = decode_results(lookup.value)
        except ValueError as exc:
            logger.warning("Ignoring cached value for %r: %s", key, exc)
            return None
        if cached_limit < limit:
            return None
        logger.debug("Cache hit: %s", key)
        return results[:limit]

    def _compute_and_store(self, normalized: str, key: str, limit: int) -> list[SearchResult]:
        results = self._compute(normalized, limit)
        if self.cache.enabled and self.cache.set(
            key, encode_results(results, limit=limit), self.cache_ttl
        ):
            logger.debug("Cached: %s", key)
        return results

    def _compute(self, normalized: str, limit: int) -> list[SearchResult]:
        query_vector = self._embed(normalized)
        candidates = self.catalog.fetch_candidates(limit=self.candidate_limit)
        return rank_candidates(
            query_vector,
            [entry for entry in candidates if entry.embedding],
            limit=limit,
        )

    def _embed(self, text: str) -> list[float]:
        attempt = 0
        while True:
            try:
                return self.embedding_provider.embed_query(text)
            except ProviderError:
                if attempt >= self.provider_retries:
                    raise
                attempt += 1
                logger.info(
                    "Retrying embedding (attempt %d of %d)",
                    attempt,
                    self.provider_retries,
                )

    def _single_flight(
        self,
        flight_key: tuple[str, int],
        compute: Callable[[], list[SearchResult]],
    ) -> list[SearchResult]:
        with self._inflight_lock:
            future = self._inflight.get(flight_key)
            leader = future is None
            if leader:
                future = Future()
                self._inflight[flight_key] = future

        if not leader:
            return list(future.result())

        try:
            results = compute()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(results)
            return results
        finally:
            with self._inflight_lock:
                self._inflight.pop(flight_key, None)
