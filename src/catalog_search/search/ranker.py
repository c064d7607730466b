"""
Cosine-similarity ranking of catalog candidates against a query vector.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Sequence

from ..errors import VectorDimensionError
from ..storage import CatalogEntry


@dataclass(frozen=True)
class SearchResult:
    """A ranked catalog entry returned to callers."""

    id: str
    name: str
    summary: str
    similarity: float
    rank: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            summary=str(data["summary"]),
            similarity=float(data["similarity"]),
            rank=int(data["rank"]),
        )


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the cosine of the angle between *a* and *b*.

    Zero-magnitude vectors have similarity 0.0 with anything.
    """
    if len(a) != len(b):
        raise VectorDimensionError(
            f"Cannot compare vectors of dimension {len(a)} and {len(b)}."
        )
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    # Rounding can push identical vectors slightly past 1.0.
    return max(-1.0, min(1.0, dot / (norm_a * norm_b)))


def rank_candidates(
    query_vector: Sequence[float],
    candidates: Iterable[CatalogEntry],
    *,
    limit: int = 5,
) -> list[SearchResult]:
    """Score candidates, sort by similarity and keep the top *limit*.

    The sort is stable, so equal scores keep their input order. Entries
    without an embedding are not candidates and are skipped.
    """
    scored = [
        (entry, cosine_similarity(query_vector, entry.embedding))
        for entry in candidates
        if entry.embedding
    ]
    ordered = sorted(scored, key=lambda pair: -pair[1])
    return [
        SearchResult(
            id=entry.id,
            name=entry.name,
            summary=entry.summary,
            similarity=similarity,
            rank=rank,
        )
        for rank, (entry, similarity) in enumerate(ordered[: max(limit, 0)])
    ]
