"""
catalog-search - semantic search over business directory listings.

Ranks catalog entries by cosine similarity between a query embedding
(Google GenAI) and precomputed entry embeddings (DuckDB), with an optional
Redis read-through cache that never fails a search.

Example usage:
    >>> from catalog_search import SemanticSearchEngine, EmbeddingProvider
    >>> from catalog_search.storage import DuckDBCatalogStore
    >>> engine = SemanticSearchEngine(DuckDBCatalogStore("catalog.duckdb"), EmbeddingProvider())
    >>> engine.search("late night pharmacy", limit=3)
"""

from .cache import (
    CacheHit,
    CacheMiss,
    CacheUnavailable,
    NullCacheStore,
    RedisCacheStore,
    build_cache_store,
)
from .config import SearchSettings
from .embeddings import EmbeddingProvider
from .errors import (
    CacheError,
    CatalogError,
    InvalidQuery,
    ProviderError,
    SearchError,
    VectorDimensionError,
)
from .search import SearchResult, SemanticSearchEngine, invalidate_search_cache
from .storage import CatalogEntry, DuckDBCatalogStore

__all__ = [
    # Search
    "SemanticSearchEngine",
    "SearchResult",
    "invalidate_search_cache",
    # Collaborators
    "EmbeddingProvider",
    "CatalogEntry",
    "DuckDBCatalogStore",
    # Cache
    "CacheHit",
    "CacheMiss",
    "CacheUnavailable",
    "NullCacheStore",
    "RedisCacheStore",
    "build_cache_store",
    # Config
    "SearchSettings",
    # Errors
    "SearchError",
    "InvalidQuery",
    "ProviderError",
    "CatalogError",
    "VectorDimensionError",
    "CacheError",
]
