"""
Keyword relevance scoring shared by the in-memory and file backends.

Score is the number of case-insensitive, non-overlapping occurrences of the
query text, normalised per 100 characters of content (floored at one unit)
so a long document with a single hit does not outrank a short, dense one.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.memory import MemoryEntry, MemoryQuery, utc_now

NORMALIZATION_UNIT = 100


def matches_tags(entry: MemoryEntry, tags: Sequence[str]) -> bool:
    """True when ``tags`` is empty or shares at least one tag with the entry."""
    if not tags:
        return True
    entry_tags = set(entry.tags)
    return any(tag in entry_tags for tag in tags)


def keyword_score(content: str, text: str) -> float:
    """Occurrences of ``text`` in ``content`` per 100 characters (min one unit)."""
    occurrences = content.lower().count(text.lower())
    return occurrences / max(1.0, len(content) / NORMALIZATION_UNIT)


def keyword_search(entries: Iterable[MemoryEntry], query: MemoryQuery) -> list[MemoryEntry]:
    """Rank ``entries`` against ``query`` with keyword scoring.

    Surviving stored entries get their ``last_accessed`` refreshed in place;
    the returned list holds scored copies, stable-sorted by descending score
    and truncated to ``query.limit``.
    """
    needle = query.text.lower()
    results: list[MemoryEntry] = []

    for entry in entries:
        if needle not in entry.content.lower() or not matches_tags(entry, query.tags):
            continue
        score = keyword_score(entry.content, query.text)
        if score < query.min_score:
            continue
        entry.last_accessed = utc_now()
        results.append(entry.with_score(score))

    results.sort(key=lambda e: e.score, reverse=True)
    return results[: query.limit]
