"""
FastAPI server for catalog search.

Exposes the semantic search operation and the cache-clear operation used by
the directory assistant front end.
"""

import asyncio
import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .cache import CacheStore, NullCacheStore, build_cache_store
from .config import SearchSettings, resolve_db_path
from .embeddings import EmbeddingProvider
from .errors import SearchError
from .search import SemanticSearchEngine, invalidate_search_cache
from .storage import DuckDBCatalogStore


logger = logging.getLogger(__name__)

app = FastAPI(title="Catalog Search", description="Semantic search over directory listings")


class SearchRequest(BaseModel):
    """Request model for search queries."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., description="Natural-language search query.")
    limit: int = Field(5, ge=1, le=100, description="Number of results to return.")
    use_cache: bool = Field(True, alias="useCache")


class SearchResultItem(BaseModel):
    id: str
    name: str
    summary: str
    similarity: float
    rank: int


class MessageResponse(BaseModel):
    message: str


@lru_cache(maxsize=1)
def get_settings() -> SearchSettings:
    return SearchSettings.from_env()


@lru_cache(maxsize=1)
def get_cache_store() -> CacheStore:
    try:
        settings = get_settings()
    except ValueError as exc:
        logger.warning("Invalid cache configuration, cache disabled: %s", exc)
        return NullCacheStore()
    return build_cache_store(settings)


def build_search_engine(
    settings: SearchSettings,
    *,
    cache: CacheStore | None = None,
    db_path: str | None = None,
) -> SemanticSearchEngine:
    """Wire the DuckDB catalog, GenAI embeddings and cache into an engine."""
    catalog = DuckDBCatalogStore(
        resolve_db_path(db_path or settings.db_path), read_only=True, initialize=False
    )
    provider = EmbeddingProvider(
        api_key=settings.google_api_key,
        model=settings.embedding_model,
        dim=settings.embedding_dim,
        timeout=settings.embedding_timeout,
    )
    return SemanticSearchEngine(
        catalog,
        provider,
        cache if cache is not None else build_cache_store(settings),
        candidate_limit=settings.candidate_limit,
        cache_ttl=settings.cache_ttl,
        provider_retries=settings.provider_retries,
    )


@lru_cache(maxsize=1)
def get_search_engine() -> SemanticSearchEngine:
    return build_search_engine(get_settings(), cache=get_cache_store())


@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:  # noqa: ARG001
    logger.error("Search failed: %s", exc)
    return JSONResponse({"error": str(exc) or "Search failed"}, status_code=400)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError  # noqa: ARG001
) -> JSONResponse:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        problems.append(f"{field}: {message}" if field else message)
    return JSONResponse({"error": "; ".join(problems) or "Invalid request"}, status_code=400)


@app.get("/health")
async def health(cache: CacheStore = Depends(get_cache_store)):
    return {"status": "ok", "cache_enabled": cache.enabled}


@app.post("/api/ai/yellow-books/search", response_model=list[SearchResultItem])
async def search(
    request: SearchRequest,
    engine: SemanticSearchEngine = Depends(get_search_engine),
):
    """Rank directory entries by semantic similarity to the query."""
    try:
        results = await asyncio.to_thread(
            engine.search,
            request.query,
            limit=request.limit,
            use_cache=request.use_cache,
        )
    except SearchError:
        raise
    except Exception as exc:
        logger.exception("Unexpected search failure")
        return JSONResponse({"error": f"Search failed: {exc}"}, status_code=500)
    return [result.to_dict() for result in results]


@app.delete("/api/ai/yellow-books/cache", response_model=MessageResponse)
async def clear_cache(
    query: str | None = None,
    cache: CacheStore = Depends(get_cache_store),
):
    """Clear one cached query, or every cached search when no query is given."""
    message = await asyncio.to_thread(invalidate_search_cache, cache, query)
    return {"message": message}


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
