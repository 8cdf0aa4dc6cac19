"""Memory storage backends."""

from .base import MemoryStorage, StorageError
from .factory import create_storage_instance
from .file_storage import FileMemoryStorage
from .in_memory import InMemoryStorage
from .noop import NoopStorage

__all__ = [
    "FileMemoryStorage",
    "InMemoryStorage",
    "MemoryStorage",
    "NoopStorage",
    "StorageError",
    "create_storage_instance",
]
