"""Search helpers for the business directory catalog."""

from .query import (
    CACHE_KEY_PREFIX,
    MAX_QUERY_LENGTH,
    cache_key,
    normalize_query,
)
from .ranker import SearchResult, cosine_similarity, rank_candidates
from .semantic import SemanticSearchEngine, invalidate_search_cache

__all__ = [
    "CACHE_KEY_PREFIX",
    "MAX_QUERY_LENGTH",
    "cache_key",
    "normalize_query",
    "SearchResult",
    "cosine_similarity",
    "rank_candidates",
    "SemanticSearchEngine",
    "invalidate_search_cache",
]
