"""
Vector similarity and rank-fusion utilities.

Pure functions with no storage side effects:

- ``cosine_similarity``: direction alignment of two embeddings
- ``vector_search``: rank a candidate set against a query embedding
- ``reciprocal_rank_fusion``: merge a keyword ranking and a vector ranking

RRF reference: Cormack, Clarke & Buettcher (2009), "Reciprocal Rank Fusion
outperforms Condorcet and individual Rank Learning Methods".
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from ..models.memory import MemoryEntry

DEFAULT_RRF_K = 60
DENOMINATOR_EPSILON = 1e-10


# ---------------------------------------------------------------------------
# Cosine similarity
# ---------------------------------------------------------------------------


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Returns a value in [-1, 1]. Mismatched lengths, empty vectors and
    degenerate (near-zero) vectors all yield exactly 0.0 instead of raising
    or producing NaN.
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    denom = float(np.sqrt(np.dot(va, va)) * np.sqrt(np.dot(vb, vb)))
    if denom < DENOMINATOR_EPSILON:
        return 0.0

    similarity = float(np.dot(va, vb)) / denom
    # Rounding can push identical vectors a hair past the bounds
    return max(-1.0, min(1.0, similarity))


def vector_search(
    entries: Iterable[MemoryEntry],
    query_embedding: Sequence[float],
    limit: int,
    min_score: float = 0.0,
) -> list[MemoryEntry]:
    """Rank entries by cosine similarity to ``query_embedding``.

    Entries without an embedding are excluded, not scored as zero. Returned
    entries are copies whose ``score`` is the similarity; ties keep the
    input order.
    """
    scored: list[MemoryEntry] = []
    for entry in entries:
        if entry.embedding is None:
            continue
        similarity = cosine_similarity(entry.embedding, query_embedding)
        if similarity >= min_score:
            scored.append(entry.with_score(similarity))

    scored.sort(key=lambda e: e.score, reverse=True)
    return scored[:limit]


# ---------------------------------------------------------------------------
# Reciprocal Rank Fusion
# ---------------------------------------------------------------------------


def rrf_score(rank: int, k: int = DEFAULT_RRF_K) -> float:
    """RRF contribution of a zero-based rank: ``1 / (k + rank + 1)``.

    Negative ranks are invalid and contribute nothing.
    """
    if rank < 0:
        return 0.0
    return 1.0 / (k + rank + 1)


def reciprocal_rank_fusion(
    keyword_results: Sequence[MemoryEntry],
    vector_results: Sequence[MemoryEntry],
    k: int = DEFAULT_RRF_K,
    limit: int = 10,
    keyword_weight: float = 1.0,
    vector_weight: float = 1.0,
) -> list[MemoryEntry]:
    """Merge two independently ranked lists into one ranking.

    Each list contributes ``weight / (k + rank + 1)`` per entry, keyed by entry
    ID, so an entry present in both lists accumulates both contributions.
    The first-seen entry object for an ID is carried forward and only its
    ``score`` is replaced with the fused value. No min-score filtering happens
    here; callers filter upstream.

    Args:
        keyword_results: Keyword ranking, best first
        vector_results: Vector ranking, best first
        k: Damping constant; larger values flatten the rank curve
        limit: Maximum number of fused results
        keyword_weight: Multiplier for keyword contributions
        vector_weight: Multiplier for vector contributions

    Returns:
        Fused entries sorted by descending score with unique IDs
    """
    # dict preserves insertion order, which makes ties resolve by first sighting
    fused: dict[str, tuple[float, MemoryEntry]] = {}

    for results, weight in ((keyword_results, keyword_weight), (vector_results, vector_weight)):
        for rank, entry in enumerate(results):
            contribution = weight * rrf_score(rank, k)
            if entry.id in fused:
                score, first_seen = fused[entry.id]
                fused[entry.id] = (score + contribution, first_seen)
            else:
                fused[entry.id] = (contribution, entry)

    merged = [entry.with_score(score) for score, entry in fused.values()]
    merged.sort(key=lambda e: e.score, reverse=True)
    return merged[:limit]
