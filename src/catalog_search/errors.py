"""
Error taxonomy for catalog search.

Everything derived from ``SearchError`` aborts a search and is reported to the
caller. ``CacheError`` is deliberately outside that hierarchy: cache failures
are absorbed where they happen and never fail a search.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for failures surfaced to search callers."""


class InvalidQuery(SearchError, ValueError):
    """Raised when the query (or requested limit) fails validation."""


class ProviderError(SearchError):
    """Raised when the embedding provider cannot produce a query vector."""


class CatalogError(SearchError):
    """Raised when candidate entries cannot be fetched from the catalog."""


class VectorDimensionError(SearchError, ValueError):
    """Raised when two vectors of different dimensionality are compared."""


class CacheError(Exception):
    """Raised by cache backends on connect/get/set/delete failures."""
