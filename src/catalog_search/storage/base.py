"""
Catalog store interface and entry model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CatalogEntry:
    """A directory listing with its precomputed embedding."""

    id: str
    name: str
    summary: str
    embedding: list[float] | None = None


class CatalogStore(Protocol):
    """Protocol for the read path used by the search engine."""

    def fetch_candidates(self, *, limit: int = 1000) -> list[CatalogEntry]:
        """Return up to *limit* entries that carry a non-empty embedding."""
