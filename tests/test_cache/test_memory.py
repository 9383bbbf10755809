"""Tests for the in-memory LRU store."""

from hubdown.cache.memory import MemoryStore
from hubdown.cache.results import Found, NotFound


class TestMemoryStore:
    async def test_get_put(self):
        store = MemoryStore()
        await store.put("k1", {"content": "<p>x</p>"})
        result = await store.get("k1")
        assert isinstance(result, Found)
        assert result.value == {"content": "<p>x</p>"}

    async def test_get_miss(self):
        assert isinstance(await MemoryStore().get("nonexistent"), NotFound)

    async def test_values_are_copied(self):
        store = MemoryStore()
        value = {"content": "a", "tags": ["x"]}
        await store.put("k1", value)
        value["tags"].append("y")
        first = await store.get("k1")
        first.value["content"] = "changed"
        second = await store.get("k1")
        assert second.value == {"content": "a", "tags": ["x"]}

    async def test_lru_eviction(self):
        # Each value is ~215 bytes; the limit fits one, not two
        store = MemoryStore(max_size_mb=0.0003)
        await store.put("k1", {"content": "a" * 200})
        await store.put("k2", {"content": "b" * 200})
        assert isinstance(await store.get("k1"), NotFound)
        assert isinstance(await store.get("k2"), Found)

    async def test_recently_used_survives(self):
        store = MemoryStore(max_size_mb=0.0004)
        await store.put("k1", {"content": "a" * 150})
        await store.put("k2", {"content": "b" * 150})
        await store.get("k1")
        await store.put("k3", {"content": "c" * 150})
        assert "k1" in store
        assert "k2" not in store

    async def test_overwrite_same_key(self):
        store = MemoryStore()
        await store.put("k1", {"content": "old"})
        await store.put("k1", {"content": "new"})
        assert len(store) == 1
        assert (await store.get("k1")).value == {"content": "new"}

    async def test_stats(self):
        store = MemoryStore()
        await store.put("k1", {"content": "x"})
        await store.get("k1")
        await store.get("k1")
        await store.get("k2")
        stats = store.stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.entries == 1
        assert stats.size_mb > 0
        assert abs(stats.hit_rate - 2 / 3) < 1e-9

    async def test_clear(self):
        store = MemoryStore()
        await store.put("k1", {"content": "x"})
        store.clear()
        assert len(store) == 0
        assert store.size_mb == 0
