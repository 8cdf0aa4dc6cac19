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
File-backed storage backend using JSON lines.

Entries are loaded into memory at construction and the whole cache is written
back after every mutation (store, delete, clear). Reads are served from memory
and never touch the file. The format is one JSON object per line, which keeps
the store human-inspectable and needs no database.

Flush failures are reported as StorageError but the in-memory mutation is not
rolled back: memory and disk disagree until the next successful flush.
"""

import asyncio
import contextlib
import logging
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from ..config import default_memory_file
from ..models.memory import MemoryEntry
from .base import StorageError
from .in_memory import InMemoryStorage

logger = logging.getLogger(__name__)


def load_entries(path: Path) -> list[MemoryEntry]:
    """
    Read entries from a JSON-lines file.

    A missing file yields an empty list. Blank lines are ignored; lines that
    do not decode or validate as an entry are skipped with a warning so one
    corrupted line never aborts startup. A later line with an ID seen earlier
    replaces the earlier entry in place.

    Raises:
        StorageError: if the file exists but cannot be read
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug(f"Memory file {path} does not exist yet, starting empty")
        return []
    except OSError as e:
        raise StorageError(f"Failed to read memory file {path}: {e}") from e

    entries: list[MemoryEntry] = []
    positions: dict[str, int] = {}
    skipped = 0

    for lineno, raw_line in enumerate(raw.splitlines(), start=1):
        if not raw_line.strip():
            continue
        try:
            entry = MemoryEntry.from_json_line(raw_line.decode("utf-8"))
        except (UnicodeDecodeError, ValidationError) as e:
            skipped += 1
            logger.warning("Skipping corrupted memory entry at %s:%d: %s", path, lineno, e)
            continue
        if not entry.id:
            skipped += 1
            logger.warning("Skipping memory entry without id at %s:%d", path, lineno)
            continue

        if entry.id in positions:
            logger.warning("Duplicate memory id %s at %s:%d, keeping the later line", entry.id, path, lineno)
            entries[positions[entry.id]] = entry
        else:
            positions[entry.id] = len(entries)
            entries.append(entry)

    if skipped:
        logger.warning(f"Skipped {skipped} unreadable line(s) in {path}")
    return entries


class FileMemoryStorage(InMemoryStorage):
    """
    Durable backend: in-memory cache plus full-file rewrite on mutation.

    Assumes a single writer process; no file locking is performed.
    """

    def __init__(self, path: str | Path | None = None):
        """
        Load entries from ``path`` (default: :meth:`default_path`).

        Args:
            path: JSON-lines file; created with its directory on first write

        Raises:
            StorageError: if an existing file cannot be read
        """
        self.path = Path(path).expanduser() if path is not None else self.default_path()
        super().__init__(load_entries(self.path))
        logger.info(f"File memory backend loaded {len(self._entries)} entries from {self.path}")

    @staticmethod
    def default_path() -> Path:
        """``~/.agent_memory/memory/memories.jsonl``"""
        return default_memory_file()

    @property
    def name(self) -> str:
        return "file"

    async def _flush(self) -> None:
        """Rewrite the whole file from the cache. Caller holds the write lock."""
        try:
            content = "".join(entry.to_json_line() + "\n" for entry in self._entries)
        except ValueError as e:
            logger.error(f"Failed to serialize memory entries: {e}")
            raise StorageError(f"Failed to serialize memory entry: {e}") from e

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write memory file {self.path}: {e}")
            with contextlib.suppress(OSError):
                await aiofiles.os.remove(tmp_path)
            raise StorageError(f"Failed to write memory file: {e}") from e

        logger.debug(f"Flushed {len(self._entries)} entries to {self.path}")

    async def store(self, entry: MemoryEntry) -> str:
        async with self._lock.write():
            memory_id = self._upsert(entry)
            await self._flush()
        return memory_id

    async def delete(self, memory_id: str) -> bool:
        async with self._lock.write():
            deleted = self._remove(memory_id)
            if deleted:
                await self._flush()
        return deleted

    async def clear(self) -> None:
        async with self._lock.write():
            self._entries.clear()
            await self._flush()

    async def reload(self) -> int:
        """
        Replace the cache with the file's current contents.

        Unflushed ``last_accessed`` refreshes are discarded.

        Returns:
            Number of entries loaded
        """
        async with self._lock.write():
            loop = asyncio.get_running_loop()
            self._entries = await loop.run_in_executor(None, load_entries, self.path)
            count = len(self._entries)
        logger.info(f"Reloaded {count} entries from {self.path}")
        return count
