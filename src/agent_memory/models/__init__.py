"""Entry and query models."""

from .memory import DEFAULT_QUERY_LIMIT, MemoryEntry, MemoryQuery, utc_now
from .validators import SearchMode, normalize_tags

__all__ = [
    "DEFAULT_QUERY_LIMIT",
    "MemoryEntry",
    "MemoryQuery",
    "SearchMode",
    "normalize_tags",
    "utc_now",
]
