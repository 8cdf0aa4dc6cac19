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

"""No-op storage backend: accepts everything, remembers nothing."""

from ..models.memory import MemoryEntry, MemoryQuery
from .base import MemoryStorage


class NoopStorage(MemoryStorage):
    """Disables memory without special-casing callers."""

    @property
    def name(self) -> str:
        return "none"

    async def store(self, entry: MemoryEntry) -> str:
        return ""

    async def search(self, query: MemoryQuery) -> list[MemoryEntry]:
        return []

    async def delete(self, memory_id: str) -> bool:
        return False

    async def get(self, memory_id: str) -> MemoryEntry | None:
        return None

    async def count(self) -> int:
        return 0

    async def clear(self) -> None:
        return None

    async def get_all_memories(self) -> list[MemoryEntry]:
        return []
