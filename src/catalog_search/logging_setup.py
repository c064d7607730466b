"""
Logging setup for the catalog search CLI and server.

Installs a Rich console handler on stderr for the ``catalog_search`` logger.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Configure and return the ``catalog_search`` logger."""
    resolved_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("catalog_search")
    logger.setLevel(resolved_level)

    # Repeated calls must not stack handlers.
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
    )
    handler.setLevel(resolved_level)
    logger.addHandler(handler)
    return logger
