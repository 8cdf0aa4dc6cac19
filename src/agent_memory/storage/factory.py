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
Storage backend factory for the memory subsystem.

Selects and constructs the configured backend.
"""

import asyncio
import logging

from ..config import StorageSettings
from .base import MemoryStorage
from .file_storage import FileMemoryStorage
from .in_memory import InMemoryStorage
from .noop import NoopStorage

logger = logging.getLogger(__name__)


async def create_storage_instance(config: StorageSettings | None = None) -> MemoryStorage:
    """
    Create the storage backend named by ``config.backend``.

    Args:
        config: Storage settings; defaults to the global ``settings.storage``

    Returns:
        Ready-to-use MemoryStorage instance

    Raises:
        StorageError: if the file backend cannot read an existing file
    """
    if config is None:
        from ..config import settings

        config = settings.storage

    logger.info(f"Creating {config.backend} storage backend instance...")

    if config.backend == "none":
        storage: MemoryStorage = NoopStorage()
    elif config.backend == "in_memory":
        storage = InMemoryStorage()
    else:
        # Loading reads the whole file; keep it off the event loop
        loop = asyncio.get_running_loop()
        storage = await loop.run_in_executor(None, FileMemoryStorage, config.file_path)
        logger.info(f"Initialized file storage at {config.file_path}")

    return storage
