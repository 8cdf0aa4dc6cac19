"""
Agent Memory - pluggable knowledge retrieval for AI agents.

Stores short tagged memories and ranks them for a query by keyword relevance,
embedding cosine similarity, or a Reciprocal Rank Fusion of both.
"""

from .models import MemoryEntry, MemoryQuery, SearchMode
from .services import MemoryService, QueryError
from .storage import (
    FileMemoryStorage,
    InMemoryStorage,
    MemoryStorage,
    NoopStorage,
    StorageError,
    create_storage_instance,
)
from .utils import cosine_similarity, reciprocal_rank_fusion, vector_search

__version__ = "0.1.0"

__all__ = [
    "FileMemoryStorage",
    "InMemoryStorage",
    "MemoryEntry",
    "MemoryQuery",
    "MemoryService",
    "MemoryStorage",
    "NoopStorage",
    "QueryError",
    "SearchMode",
    "StorageError",
    "cosine_similarity",
    "create_storage_instance",
    "reciprocal_rank_fusion",
    "vector_search",
]
