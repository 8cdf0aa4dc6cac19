# Copyright 2024 Heinrich Krupp
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Abstract storage contract for memory backends.

Every backend (in-memory, file, no-op) implements the same six operations so
callers never need to know which one is active. Backends score by keyword
only; mode-aware vector and hybrid search live in the service layer.
"""

import uuid
from abc import ABC, abstractmethod

from ..models.memory import MemoryEntry, MemoryQuery


class StorageError(Exception):
    """Storage-related errors (I/O or serialisation failures)."""

    pass


def new_memory_id() -> str:
    """Generate an opaque unique identifier for an entry."""
    return str(uuid.uuid4())


class MemoryStorage(ABC):
    """Abstract base class for memory storage backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend identifier (e.g. ``"file"``, ``"in_memory"``)."""

    @abstractmethod
    async def store(self, entry: MemoryEntry) -> str:
        """
        Insert or overwrite an entry.

        An empty ``entry.id`` is replaced with a generated one. An existing
        entry with the same ID is overwritten in place.

        Args:
            entry: Entry to store; its ``score`` is reset

        Returns:
            The final entry ID

        Raises:
            StorageError: if persisting the change fails
        """

    @abstractmethod
    async def search(self, query: MemoryQuery) -> list[MemoryEntry]:
        """
        Keyword search, ranked by descending relevance.

        Returned entries are copies with ``score`` set; the matching stored
        entries get their ``last_accessed`` refreshed.
        """

    @abstractmethod
    async def delete(self, memory_id: str) -> bool:
        """Delete an entry by ID. Returns False if the ID was absent."""

    @abstractmethod
    async def get(self, memory_id: str) -> MemoryEntry | None:
        """Exact lookup by ID. Does not touch ``score`` or ``last_accessed``."""

    @abstractmethod
    async def count(self) -> int:
        """Number of live entries."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove all entries, including any on-disk state."""

    @abstractmethod
    async def get_all_memories(self) -> list[MemoryEntry]:
        """Copies of all live entries in insertion order."""
