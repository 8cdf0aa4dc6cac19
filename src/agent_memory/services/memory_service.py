"""
Memory Service - mode-aware search on top of any storage backend.

Backends only know keyword scoring. This service honours ``MemoryQuery.mode``:

- ``keyword``: delegate to the backend's search
- ``vector``: cosine ranking over the backend's entries against a caller-supplied
  query embedding
- ``hybrid``: run both rankings and merge them with Reciprocal Rank Fusion

Embeddings are never generated here; callers pass them in.
"""

import logging
from collections.abc import Sequence

from ..config import HybridSearchSettings
from ..models.memory import MemoryEntry, MemoryQuery
from ..storage.base import MemoryStorage
from ..utils.keyword_search import matches_tags
from ..utils.vector_search import reciprocal_rank_fusion, vector_search

logger = logging.getLogger(__name__)


class QueryError(Exception):
    """A query that cannot be served with the inputs provided."""

    pass


class MemoryService:
    """Search and store facade over a single MemoryStorage backend."""

    def __init__(self, storage: MemoryStorage, config: HybridSearchSettings | None = None):
        if config is None:
            from ..config import settings

            config = settings.hybrid_search
        self.storage = storage
        self.config = config

    async def store_memory(
        self,
        content: str,
        tags: Sequence[str] | None = None,
        source: str | None = None,
        embedding: Sequence[float] | None = None,
        memory_id: str = "",
    ) -> str:
        """Build an entry and store it. Returns the assigned ID."""
        entry = MemoryEntry(
            id=memory_id,
            content=content,
            tags=list(tags) if tags else [],
            source=source,
            embedding=list(embedding) if embedding is not None else None,
        )
        return await self.storage.store(entry)

    async def search(
        self,
        query: MemoryQuery,
        query_embedding: Sequence[float] | None = None,
    ) -> list[MemoryEntry]:
        """
        Search according to ``query.mode``.

        Args:
            query: Search request
            query_embedding: Embedding of ``query.text``; required for vector
                mode, optional for hybrid (keyword-only without it)

        Returns:
            Ranked entries, at most ``query.limit``

        Raises:
            QueryError: vector mode without a query embedding
            StorageError: propagated from the backend
        """
        if query.mode == "keyword":
            return await self.storage.search(query)

        if query.mode == "vector":
            if query_embedding is None:
                raise QueryError("Vector search requires a query embedding")
            return await self._vector_search(query, query_embedding, query.limit)

        if query_embedding is None:
            logger.debug("Hybrid search without query embedding, falling back to keyword search")
            return await self.storage.search(query)

        return await self._hybrid_search(query, query_embedding)

    async def _vector_search(
        self,
        query: MemoryQuery,
        query_embedding: Sequence[float],
        limit: int,
    ) -> list[MemoryEntry]:
        candidates = [entry for entry in await self.storage.get_all_memories() if matches_tags(entry, query.tags)]
        results = vector_search(candidates, query_embedding, limit, query.min_score)
        logger.debug(f"Vector search over {len(candidates)} candidates returned {len(results)} results")
        return results

    async def _hybrid_search(self, query: MemoryQuery, query_embedding: Sequence[float]) -> list[MemoryEntry]:
        fetch_size = query.limit * self.config.candidate_multiplier

        keyword_results = await self.storage.search(query.model_copy(update={"limit": fetch_size}))
        vector_results = await self._vector_search(query, query_embedding, fetch_size)

        fused = reciprocal_rank_fusion(
            keyword_results,
            vector_results,
            k=self.config.rrf_k,
            limit=query.limit,
            keyword_weight=self.config.keyword_weight,
            vector_weight=self.config.vector_weight,
        )
        logger.debug(
            f"Hybrid search: {len(keyword_results)} keyword + {len(vector_results)} vector -> {len(fused)} fused"
        )
        return fused
