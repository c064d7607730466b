"""
Query validation, cache key derivation and cached payload encoding.
"""

from __future__ import annotations

import json
from typing import Any

from ..errors import InvalidQuery
from .ranker import SearchResult


MAX_QUERY_LENGTH = 500
CACHE_KEY_PREFIX = "ai-search:"


def normalize_query(query: str | None) -> str:
    """Validate a raw query and return its trimmed form.

    The length limit applies to the raw string.
    """
    if query is None or not query.strip():
        raise InvalidQuery("Query is required")
    if len(query) > MAX_QUERY_LENGTH:
        raise InvalidQuery(f"Query too long (max {MAX_QUERY_LENGTH} characters)")
    return query.strip()


def validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidQuery(f"Limit must be a positive integer, got {limit!r}")
    return limit


def cache_key(normalized_query: str) -> str:
    return f"{CACHE_KEY_PREFIX}{normalized_query}"


def encode_results(results: list[SearchResult], *, limit: int) -> str:
    """Serialize ranked results together with the limit they were ranked for."""
    return json.dumps(
        {"limit": limit, "results": [result.to_dict() for result in results]}
    )


def decode_results(payload: str) -> tuple[int, list[SearchResult]]:
    """Inverse of :func:`encode_results`. Raises ValueError on bad payloads."""
    try:
        data: Any = json.loads(payload)
        limit = int(data["limit"])
        results = [SearchResult.from_dict(item) for item in data["results"]]
    except (TypeError, KeyError, ValueError) as exc:
        raise ValueError(f"Malformed cached search payload: {exc}") from exc
    return limit, results
