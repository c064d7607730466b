"""
DuckDB accessor for the business directory catalog.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import duckdb

from ..errors import CatalogError
from .base import CatalogEntry


class DuckDBCatalogStore:
    """DuckDB-backed catalog of directory entries and their embeddings."""

    def __init__(
        self,
        db_path: str,
        *,
        read_only: bool = False,
        initialize: bool = True,
    ) -> None:
        self.db_path = str(Path(db_path).expanduser().resolve())
        self.read_only = read_only
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = duckdb.connect(self.db_path, read_only=read_only)
        except duckdb.Error as exc:
            raise CatalogError(f"Cannot open catalog at {self.db_path}: {exc}") from exc
        if initialize and not read_only:
            self.initialize()

    def close(self) -> None:
        """Close the underlying DuckDB connection."""
        self._conn.close()

    def initialize(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS catalog_entries (
                id VARCHAR PRIMARY KEY,
                name VARCHAR NOT NULL,
                summary VARCHAR NOT NULL DEFAULT '',
                embedding DOUBLE[]
            );
            """
        )

    def upsert_entries(self, entries: Iterable[CatalogEntry]) -> int:
        """Insert or replace entries. Return the number of rows written."""
        rows = [
            [entry.id, entry.name, entry.summary, entry.embedding]
            for entry in entries
        ]
        if not rows:
            return 0
        self._conn.executemany(
            """
            INSERT INTO catalog_entries (id, name, summary, embedding)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                summary = excluded.summary,
                embedding = excluded.embedding
            """,
            rows,
        )
        return len(rows)

    def fetch_candidates(self, *, limit: int = 1000) -> list[CatalogEntry]:
        # Each call gets its own cursor; the engine may fetch from several threads.
        cursor = self._conn.cursor()
        try:
            rows = cursor.execute(
                """
                SELECT id, name, summary, embedding
                FROM catalog_entries
                WHERE embedding IS NOT NULL
                  AND len(embedding) > 0
                ORDER BY id
                LIMIT ?
                """,
                [max(limit, 0)],
            ).fetchall()
        except duckdb.Error as exc:
            raise CatalogError(f"Failed to fetch catalog candidates: {exc}") from exc
        finally:
            cursor.close()

        return [
            CatalogEntry(
                id=str(row[0]),
                name=str(row[1]),
                summary=str(row[2] or ""),
                embedding=[float(v) for v in row[3]],
            )
            for row in rows
        ]
