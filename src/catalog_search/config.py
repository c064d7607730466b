"""
Configuration helpers for catalog search.

Settings are read from the process environment; explicit constructor
arguments always win over environment values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_DB_PATH = "~/.catalog_search/catalog.duckdb"
ENV_DB_PATH = "CATALOG_SEARCH_DB_PATH"

DEFAULT_REDIS_PORT = 6379
DEFAULT_CACHE_TTL = 3600
DEFAULT_CACHE_TIMEOUT = 2.0
DEFAULT_EMBEDDING_TIMEOUT = 10.0
DEFAULT_CANDIDATE_LIMIT = 1000


def resolve_db_path(override_path: str | None = None) -> str:
    """
    Resolve the DuckDB catalog path from CLI override, env var, or default.

    Precedence:
    1) explicit override_path
    2) CATALOG_SEARCH_DB_PATH
    3) default path
    """
    raw_path = override_path or os.getenv(ENV_DB_PATH) or DEFAULT_DB_PATH
    resolved = Path(raw_path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return str(resolved)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class SearchSettings:
    """Runtime settings for the search engine, cache and HTTP server."""

    google_api_key: str | None = None
    embedding_model: str | None = None
    embedding_dim: int | None = None
    embedding_timeout: float = DEFAULT_EMBEDDING_TIMEOUT
    redis_host: str | None = None
    redis_port: int = DEFAULT_REDIS_PORT
    redis_password: str | None = None
    cache_ttl: int = DEFAULT_CACHE_TTL
    cache_timeout: float = DEFAULT_CACHE_TIMEOUT
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT
    provider_retries: int = 0
    db_path: str | None = None
    log_level: str = "INFO"

    @property
    def cache_configured(self) -> bool:
        return bool(self.redis_host)

    @classmethod
    def from_env(cls) -> "SearchSettings":
        dim = _env_int("CATALOG_SEARCH_EMBEDDING_DIM", 0)
        return cls(
            google_api_key=os.getenv("GOOGLE_API_KEY") or None,
            embedding_model=os.getenv("CATALOG_SEARCH_EMBEDDING_MODEL") or None,
            embedding_dim=dim or None,
            embedding_timeout=_env_float(
                "CATALOG_SEARCH_EMBEDDING_TIMEOUT", DEFAULT_EMBEDDING_TIMEOUT
            ),
            redis_host=(os.getenv("REDIS_HOST") or "").strip() or None,
            redis_port=_env_int("REDIS_PORT", DEFAULT_REDIS_PORT),
            redis_password=os.getenv("REDIS_PASSWORD") or None,
            cache_ttl=_env_int("CATALOG_SEARCH_CACHE_TTL", DEFAULT_CACHE_TTL),
            cache_timeout=_env_float(
                "CATALOG_SEARCH_CACHE_TIMEOUT", DEFAULT_CACHE_TIMEOUT
            ),
            candidate_limit=_env_int(
                "CATALOG_SEARCH_CANDIDATE_LIMIT", DEFAULT_CANDIDATE_LIMIT
            ),
            provider_retries=_env_int("CATALOG_SEARCH_PROVIDER_RETRIES", 0),
            db_path=os.getenv(ENV_DB_PATH) or None,
            log_level=os.getenv("CATALOG_SEARCH_LOG_LEVEL", "INFO"),
        )
