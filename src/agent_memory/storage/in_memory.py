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
In-memory storage backend.

Holds entries in a process-local ordered list. Useful for tests and ephemeral
sessions where persistence is not needed.
"""

import logging

from ..models.memory import MemoryEntry, MemoryQuery
from ..utils.keyword_search import keyword_search
from .base import MemoryStorage, new_memory_id
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)


class InMemoryStorage(MemoryStorage):
    """Ordered list of entries guarded by a reader/writer lock."""

    def __init__(self, entries: list[MemoryEntry] | None = None):
        self._entries: list[MemoryEntry] = list(entries) if entries else []
        self._lock = ReadWriteLock()

    @property
    def name(self) -> str:
        return "in_memory"

    # ------------------------------------------------------------------
    # Unlocked helpers; callers hold the write lock
    # ------------------------------------------------------------------

    def _upsert(self, entry: MemoryEntry) -> str:
        entry = entry.model_copy(deep=True)
        if not entry.id:
            entry.id = new_memory_id()
        entry.score = 0.0

        for i, existing in enumerate(self._entries):
            if existing.id == entry.id:
                self._entries[i] = entry
                logger.debug(f"Overwrote memory {entry.id}")
                break
        else:
            self._entries.append(entry)
            logger.debug(f"Stored memory {entry.id}")
        return entry.id

    def _remove(self, memory_id: str) -> bool:
        for i, existing in enumerate(self._entries):
            if existing.id == memory_id:
                del self._entries[i]
                logger.debug(f"Deleted memory {memory_id}")
                return True
        return False

    # ------------------------------------------------------------------
    # MemoryStorage
    # ------------------------------------------------------------------

    async def store(self, entry: MemoryEntry) -> str:
        async with self._lock.write():
            return self._upsert(entry)

    async def search(self, query: MemoryQuery) -> list[MemoryEntry]:
        async with self._lock.read():
            results = keyword_search(self._entries, query)
        logger.debug(f"Keyword search '{query.text}' returned {len(results)} results")
        return results

    async def delete(self, memory_id: str) -> bool:
        async with self._lock.write():
            return self._remove(memory_id)

    async def get(self, memory_id: str) -> MemoryEntry | None:
        async with self._lock.read():
            for entry in self._entries:
                if entry.id == memory_id:
                    return entry.model_copy(deep=True)
        return None

    async def count(self) -> int:
        async with self._lock.read():
            return len(self._entries)

    async def clear(self) -> None:
        async with self._lock.write():
            self._entries.clear()

    async def get_all_memories(self) -> list[MemoryEntry]:
        async with self._lock.read():
            return [entry.model_copy(deep=True) for entry in self._entries]
