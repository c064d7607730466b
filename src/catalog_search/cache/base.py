"""
Cache store interface, lookup results and the disabled-cache store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class CacheHit:
    """A cached value was found."""

    value: str


@dataclass(frozen=True)
class CacheMiss:
    """The backend answered and holds no value for the key."""


@dataclass(frozen=True)
class CacheUnavailable:
    """The backend could not be reached or failed while answering."""

    reason: str = ""


CacheLookup = Union[CacheHit, CacheMiss, CacheUnavailable]


class CacheStore(Protocol):
    """Protocol for TTL key/value stores used by the search engine."""

    @property
    def enabled(self) -> bool:
        """False when no backend is configured."""

    def get(self, key: str) -> CacheLookup:
        """Look up *key*. Never raises."""

    def set(self, key: str, value: str, ttl: int) -> bool:
        """Store *value* under *key* for *ttl* seconds. Never raises."""

    def delete_key(self, key: str) -> int:
        """Delete one key. Return the number of keys removed."""

    def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with *prefix*. Return the number removed."""


class NullCacheStore:
    """Cache store used when no backend is configured."""

    @property
    def enabled(self) -> bool:
        return False

    def get(self, key: str) -> CacheLookup:  # noqa: ARG002
        return CacheMiss()

    def set(self, key: str, value: str, ttl: int) -> bool:  # noqa: ARG002
        return False

    def delete_key(self, key: str) -> int:  # noqa: ARG002
        return 0

    def delete_prefix(self, prefix: str) -> int:  # noqa: ARG002
        return 0
