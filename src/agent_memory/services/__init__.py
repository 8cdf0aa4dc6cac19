"""Service layer for memory operations."""

from .memory_service import MemoryService, QueryError

__all__ = ["MemoryService", "QueryError"]
