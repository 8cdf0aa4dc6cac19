"""Annotated field types shared by the entry, query and settings models.

Centralises tag normalisation, numeric constraints and the search-mode
Literal so the entry and query models speak the same language.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field

# ---------------------------------------------------------------------------
# Tag normalisation
# ---------------------------------------------------------------------------


def normalize_tags(v: Any) -> list[str]:
    """Accept ``str | list | None`` and return a clean ``list[str]``.

    * ``"a, b, c"`` → ``["a", "b", "c"]``
    * ``["a", None, " b "]`` → ``["a", "b"]``
    * ``None`` → ``[]``
    """
    if v is None:
        return []
    if isinstance(v, str):
        return [t.strip() for t in v.split(",") if t.strip()]
    if isinstance(v, (list, tuple, set, frozenset)):
        return [s for item in v if item is not None and (s := str(item).strip())]
    return []


Tags = Annotated[list[str], BeforeValidator(normalize_tags)]
"""Tag input accepting str, list or None; always validates to list[str]."""


# ---------------------------------------------------------------------------
# Numeric types
# ---------------------------------------------------------------------------

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0, for limits and counts."""

Embedding = list[float]
"""Pre-computed embedding vector supplied by an external provider."""


# ---------------------------------------------------------------------------
# Literal enums
# ---------------------------------------------------------------------------

SearchMode = Literal["keyword", "vector", "hybrid"]
BackendName = Literal["file", "in_memory", "none"]
