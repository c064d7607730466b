"""
Redis-backed cache store.

The client is created and pinged on first use, then reused by every thread.
A failed connect is not remembered: the next call tries again. Reads and
writes degrade to ``CacheUnavailable`` / ``False`` instead of raising.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

import redis
from redis.exceptions import RedisError

from ..errors import CacheError
from .base import CacheHit, CacheLookup, CacheMiss, CacheUnavailable


logger = logging.getLogger(__name__)

_SCAN_BATCH = 500


class RedisCacheStore:
    """TTL key/value store over a lazily connected Redis client."""

    def __init__(
        self,
        *,
        host: str,
        port: int = 6379,
        password: str | None = None,
        timeout: float | None = None,
        client_factory: Callable[[], Any] | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self._password = password
        self._timeout = timeout
        self._client_factory = client_factory or self._default_client
        self._client: Any | None = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return True

    def _default_client(self) -> redis.Redis:
        return redis.Redis(
            host=self.host,
            port=self.port,
            password=self._password,
            socket_timeout=self._timeout,
            socket_connect_timeout=self._timeout,
            decode_responses=True,
        )

    def _connect(self) -> Any:
        client = self._client
        if client is not None:
            return client

        # Connect outside the lock so a dead backend costs each caller one
        # timeout, not one per queued caller.
        try:
            candidate = self._client_factory()
            candidate.ping()
        except RedisError as exc:
            raise CacheError(
                f"Cannot connect to Redis at {self.host}:{self.port}: {exc}"
            ) from exc

        with self._lock:
            if self._client is None:
                logger.info("Connected to Redis at %s:%s", self.host, self.port)
                self._client = candidate
                return candidate
            published = self._client
        candidate.close()
        return published

    def get(self, key: str) -> CacheLookup:
        try:
            value = self._connect().get(key)
        except (CacheError, RedisError) as exc:
            logger.warning("Cache lookup failed for %r: %s", key, exc)
            return CacheUnavailable(reason=str(exc))
        if value is None:
            return CacheMiss()
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return CacheHit(value=value)

    def set(self, key: str, value: str, ttl: int) -> bool:
        try:
            self._connect().setex(key, ttl, value)
        except (CacheError, RedisError) as exc:
            logger.warning("Cache write failed for %r: %s", key, exc)
            return False
        return True

    def delete_key(self, key: str) -> int:
        try:
            return int(self._connect().delete(key))
        except RedisError as exc:
            raise CacheError(f"Failed to delete cache key {key!r}: {exc}") from exc

    def delete_prefix(self, prefix: str) -> int:
        try:
            client = self._connect()
            deleted = 0
            batch: list[str] = []
            for key in client.scan_iter(match=f"{prefix}*", count=_SCAN_BATCH):
                batch.append(key)
                if len(batch) >= _SCAN_BATCH:
                    deleted += int(client.delete(*batch))
                    batch.clear()
            if batch:
                deleted += int(client.delete(*batch))
            return deleted
        except RedisError as exc:
            raise CacheError(
                f"Failed to delete cache keys under {prefix!r}: {exc}"
            ) from exc
