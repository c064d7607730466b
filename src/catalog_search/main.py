import logging
from typing import Annotated, Optional

from rich.console import Console
from rich.table import Table
from typer import Argument, Exit, Option, Typer

from .cache import CacheStore, NullCacheStore, build_cache_store
from .config import SearchSettings
from .errors import SearchError
from .logging_setup import setup_logging
from .search import SemanticSearchEngine, invalidate_search_cache
from .server import build_search_engine, run_server

logger = logging.getLogger(__name__)

app = Typer(help="Semantic search over business directory listings.")


def build_engine(db_path: str | None = None) -> SemanticSearchEngine:
    return build_search_engine(SearchSettings.from_env(), db_path=db_path)


def build_cli_cache() -> CacheStore:
    try:
        settings = SearchSettings.from_env()
    except ValueError as exc:
        logger.warning("Invalid cache configuration, cache disabled: %s", exc)
        return NullCacheStore()
    return build_cache_store(settings)


@app.callback()
def configure(
    log_level: Annotated[
        Optional[str],
        Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."),
    ] = None,
) -> None:
    if log_level is None:
        try:
            log_level = SearchSettings.from_env().log_level
        except ValueError as exc:
            Console(stderr=True).print(f"[yellow]Ignoring invalid configuration:[/] {exc}")
            log_level = "INFO"
    setup_logging(log_level)


@app.command()
def search(
    query: Annotated[str, Argument(help="Natural-language search query.")],
    limit: Annotated[int, Option("--limit", "-n", help="Number of results.")] = 5,
    no_cache: Annotated[
        bool, Option("--no-cache", help="Bypass the result cache.")
    ] = False,
    db_path: Annotated[
        Optional[str], Option("--db-path", help="DuckDB catalog path.")
    ] = None,
) -> None:
    """Rank catalog entries by similarity to QUERY."""
    console = Console()
    try:
        engine = build_engine(db_path)
        results = engine.search(query, limit=limit, use_cache=not no_cache)
    except (SearchError, ValueError) as exc:
        console.print(f"[bold red]Search failed:[/] {exc}")
        raise Exit(code=1)

    if not results:
        console.print("[yellow]No matching entries.[/]")
        return

    table = Table(title=f"Results for: {query.strip()}")
    table.add_column("Rank", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Similarity", justify="right")
    table.add_column("Summary")
    for result in results:
        table.add_row(
            str(result.rank),
            result.name,
            f"{result.similarity:.4f}",
            result.summary,
        )
    console.print(table)


@app.command("clear-cache")
def clear_cache(
    query: Annotated[
        Optional[str],
        Option("--query", "-q", help="Only clear the cached result for this query."),
    ] = None,
) -> None:
    """Clear cached search results."""
    message = invalidate_search_cache(build_cli_cache(), query)
    Console().print(message)


@app.command()
def serve(
    host: Annotated[str, Option("--host", help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, Option("--port", help="Bind port.")] = 8000,
) -> None:
    """Run the HTTP API."""
    run_server(host=host, port=port)
