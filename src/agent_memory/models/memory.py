"""Memory-related data models.

Pydantic v2 models for a stored memory entry and a search request, with
timestamp normalisation and the JSON-lines wire format used by the durable
backend.
"""

from datetime import datetime, timezone
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validators import Embedding, NonNegativeInt, SearchMode, Tags

DEFAULT_QUERY_LIMIT = 10


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Memory entry
# ---------------------------------------------------------------------------


class MemoryEntry(BaseModel):
    """A single stored memory with its metadata.

    ``score`` is transient: it only carries meaning on entries returned from a
    search. ``embedding`` lives for the process lifetime only and is never
    written to disk.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    content: str
    tags: Tags = []
    source: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    last_accessed: datetime = Field(default_factory=utc_now)
    score: float = 0.0
    embedding: Embedding | None = Field(default=None, exclude=True)

    @field_validator("created_at", "last_accessed", mode="after")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC and convert aware ones to UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def touch(self) -> None:
        """Update the last_accessed timestamp to the current time."""
        self.last_accessed = utc_now()

    def with_score(self, score: float) -> Self:
        """Return a detached copy carrying ``score``."""
        return self.model_copy(update={"score": score}, deep=True)

    def to_json_line(self) -> str:
        """Serialise to one line of the persisted JSON-lines format."""
        return self.model_dump_json()

    @classmethod
    def from_json_line(cls, line: str) -> "MemoryEntry":
        """Parse one persisted line; the stored score is discarded.

        Raises:
            pydantic.ValidationError: if the line is not a valid entry.
        """
        entry = cls.model_validate_json(line)
        entry.score = 0.0
        return entry


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class MemoryQuery(BaseModel):
    """A search request against a memory backend.

    Backends always apply keyword scoring; ``mode`` is honoured by
    :class:`agent_memory.services.memory_service.MemoryService`.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    limit: NonNegativeInt = DEFAULT_QUERY_LIMIT
    min_score: float = 0.0
    tags: Tags = []
    mode: SearchMode = "hybrid"
