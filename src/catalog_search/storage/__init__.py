"""Catalog store accessors for catalog search."""

from .base import CatalogEntry, CatalogStore
from .duckdb import DuckDBCatalogStore

__all__ = [
    "CatalogEntry",
    "CatalogStore",
    "DuckDBCatalogStore",
]
