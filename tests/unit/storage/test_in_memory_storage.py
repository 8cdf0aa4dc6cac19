"""Tests for the in-memory storage backend."""

from datetime import datetime, timezone

import pytest

from agent_memory.models.memory import MemoryEntry, MemoryQuery
from agent_memory.storage.in_memory import InMemoryStorage

OLD = datetime(2020, 1, 1, tzinfo=timezone.utc)


def _entry(content: str, memory_id: str = "", tags: list[str] | None = None) -> MemoryEntry:
    return MemoryEntry(id=memory_id, content=content, tags=tags or [], last_accessed=OLD)


def test_name():
    assert InMemoryStorage().name == "in_memory"


@pytest.mark.asyncio
async def test_store_and_get():
    storage = InMemoryStorage()

    memory_id = await storage.store(_entry("Rust is a systems language"))

    assert memory_id
    entry = await storage.get(memory_id)
    assert entry is not None
    assert entry.content == "Rust is a systems language"


@pytest.mark.asyncio
async def test_store_keeps_caller_supplied_id():
    storage = InMemoryStorage()
    assert await storage.store(_entry("x", "mem_001")) == "mem_001"


@pytest.mark.asyncio
async def test_generated_ids_are_unique():
    storage = InMemoryStorage()
    ids = {await storage.store(_entry(f"entry {i}")) for i in range(20)}
    assert len(ids) == 20


@pytest.mark.asyncio
async def test_store_same_id_overwrites_in_place():
    storage = InMemoryStorage()
    await storage.store(_entry("first", "a"))
    await storage.store(_entry("second", "b"))

    await storage.store(_entry("first, revised", "a"))

    assert await storage.count() == 2
    assert (await storage.get("a")).content == "first, revised"
    assert [e.id for e in await storage.get_all_memories()] == ["a", "b"]


@pytest.mark.asyncio
async def test_store_resets_score():
    storage = InMemoryStorage()
    entry = _entry("x", "a")
    entry.score = 0.9

    await storage.store(entry)

    assert (await storage.get("a")).score == 0.0


@pytest.mark.asyncio
async def test_store_does_not_mutate_caller_entry():
    storage = InMemoryStorage()
    entry = _entry("x")

    memory_id = await storage.store(entry)
    entry.content = "changed after store"

    assert entry.id == ""
    assert (await storage.get(memory_id)).content == "x"


@pytest.mark.asyncio
async def test_search_by_keyword():
    storage = InMemoryStorage()
    await storage.store(_entry("Rust is great for systems programming"))
    await storage.store(_entry("Python is great for scripting"))
    await storage.store(_entry("JavaScript runs in the browser"))

    results = await storage.search(MemoryQuery(text="Rust", mode="keyword"))

    assert len(results) == 1
    assert "Rust" in results[0].content


@pytest.mark.asyncio
async def test_search_ignores_mode():
    storage = InMemoryStorage()
    await storage.store(_entry("Rust is great"))

    for mode in ("keyword", "vector", "hybrid"):
        results = await storage.search(MemoryQuery(text="rust", mode=mode))
        assert len(results) == 1


@pytest.mark.asyncio
async def test_search_filters_by_tags():
    storage = InMemoryStorage()
    await storage.store(_entry("rust preference", "a", tags=["preference"]))
    await storage.store(_entry("rust fact", "b", tags=["fact"]))

    results = await storage.search(MemoryQuery(text="rust", tags=["preference", "other"]))

    assert [r.id for r in results] == ["a"]


@pytest.mark.asyncio
async def test_search_refreshes_last_accessed_but_get_does_not():
    storage = InMemoryStorage()
    await storage.store(_entry("rust", "hit"))
    await storage.store(_entry("python", "miss"))

    assert (await storage.get("hit")).last_accessed == OLD

    await storage.search(MemoryQuery(text="rust"))

    assert (await storage.get("hit")).last_accessed > OLD
    assert (await storage.get("miss")).last_accessed == OLD


@pytest.mark.asyncio
async def test_search_results_are_detached():
    storage = InMemoryStorage()
    await storage.store(_entry("rust", "a"))

    results = await storage.search(MemoryQuery(text="rust"))
    results[0].content = "mutated"

    assert (await storage.get("a")).content == "rust"
    assert (await storage.get("a")).score == 0.0


@pytest.mark.asyncio
async def test_repeated_search_same_order_and_scores():
    storage = InMemoryStorage()
    for content in ("rust rust", "a rust", "rust and more rust and rust", "rust"):
        await storage.store(_entry(content))
    query = MemoryQuery(text="rust")

    first = [(e.id, e.score) for e in await storage.search(query)]
    second = [(e.id, e.score) for e in await storage.search(query)]

    assert first == second


@pytest.mark.asyncio
async def test_delete_entry():
    storage = InMemoryStorage()
    memory_id = await storage.store(_entry("To be deleted"))
    assert await storage.count() == 1

    assert await storage.delete(memory_id) is True
    assert await storage.count() == 0
    assert await storage.get(memory_id) is None


@pytest.mark.asyncio
async def test_delete_is_idempotent():
    storage = InMemoryStorage()
    memory_id = await storage.store(_entry("x"))

    assert await storage.delete(memory_id) is True
    assert await storage.delete(memory_id) is False
    assert await storage.delete("never-existed") is False


@pytest.mark.asyncio
async def test_clear_all():
    storage = InMemoryStorage()
    await storage.store(_entry("Entry 1"))
    await storage.store(_entry("Entry 2"))
    assert await storage.count() == 2

    await storage.clear()

    assert await storage.count() == 0
    assert await storage.get_all_memories() == []


@pytest.mark.asyncio
async def test_get_all_memories_keeps_embeddings():
    storage = InMemoryStorage()
    await storage.store(MemoryEntry(id="a", content="x", embedding=[1.0, 0.0]))

    entries = await storage.get_all_memories()

    assert entries[0].embedding == [1.0, 0.0]


@pytest.mark.asyncio
async def test_instances_are_independent():
    first, second = InMemoryStorage(), InMemoryStorage()
    await first.store(_entry("only in first"))

    assert await first.count() == 1
    assert await second.count() == 0
