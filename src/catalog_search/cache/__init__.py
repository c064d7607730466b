"""Cache stores for search results."""

from __future__ import annotations

from ..config import SearchSettings
from .base import (
    CacheHit,
    CacheLookup,
    CacheMiss,
    CacheStore,
    CacheUnavailable,
    NullCacheStore,
)
from .redis_store import RedisCacheStore


def build_cache_store(settings: SearchSettings) -> CacheStore:
    """Return a Redis-backed store when a host is configured, else a null store."""
    if not settings.cache_configured:
        return NullCacheStore()
    return RedisCacheStore(
        host=str(settings.redis_host),
        port=settings.redis_port,
        password=settings.redis_password,
        timeout=settings.cache_timeout,
    )


__all__ = [
    "CacheHit",
    "CacheLookup",
    "CacheMiss",
    "CacheStore",
    "CacheUnavailable",
    "NullCacheStore",
    "RedisCacheStore",
    "build_cache_store",
]
