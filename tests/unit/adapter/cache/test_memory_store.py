"""Unit tests for InMemoryCacheStore."""

from types import SimpleNamespace

import pytest

from forum.adapter.cache import InMemoryCacheStore


class TestKeyValues:
    """Tests for plain key/value operations."""

    @pytest.mark.asyncio
    async def test_set_then_get_returns_value(self):
        """A stored value should be readable until deleted."""
        store = InMemoryCacheStore()

        await store.set("posts:1", "payload", ttl=60)

        assert await store.get("posts:1") == "payload"
        assert await store.exists("posts:1")

    @pytest.mark.asyncio
    async def test_expired_key_reads_as_missing(self, monkeypatch):
        """A key past its TTL should behave as if it was never set."""
        store = InMemoryCacheStore()
        now = [100.0]
        monkeypatch.setattr(
            "forum.adapter.cache.memory.time",
            SimpleNamespace(monotonic=lambda: now[0]),
        )

        await store.set("posts:1", "payload", ttl=10)
        now[0] = 111.0

        assert await store.get("posts:1") is None
        assert not await store.exists("posts:1")

    @pytest.mark.asyncio
    async def test_get_many_keeps_order_and_misses(self):
        """Batch reads should return None in place of missing keys."""
        store = InMemoryCacheStore()
        await store.set_many({"a": "1", "c": "3"})

        assert await store.get_many(["a", "b", "c"]) == ["1", None, "3"]

    @pytest.mark.asyncio
    async def test_delete_pattern_only_removes_matching_keys(self):
        """Pattern deletes should leave other namespaces untouched."""
        store = InMemoryCacheStore()
        await store.set_many({"feed:a": "1", "feed:b": "2", "posts:1": "3"})

        removed = await store.delete_pattern("feed:*")

        assert removed == 2
        assert await store.scan_keys("*") == ["posts:1"]


class TestSortedSets:
    """Tests for sorted set operations."""

    @pytest.mark.asyncio
    async def test_zrevrange_orders_by_score_descending(self):
        """Highest scores should come first."""
        store = InMemoryCacheStore()
        await store.zadd_many([("k", "low", 1), ("k", "high", 5), ("k", "mid", 3)])

        assert await store.zrevrange("k", 0, -1) == ["high", "mid", "low"]
        assert await store.zrevrange("k", 0, 1) == ["high", "mid"]

    @pytest.mark.asyncio
    async def test_zincrby_creates_and_increments(self):
        """Incrementing a missing member should start it from zero."""
        store = InMemoryCacheStore()

        assert await store.zincrby("k", "m", 2) == 2
        assert await store.zincrby("k", "m", 1) == 3

    @pytest.mark.asyncio
    async def test_zrem_drops_empty_set(self):
        """Removing the last member should remove the key itself."""
        store = InMemoryCacheStore()
        await store.zadd_many([("k", "m", 1)])

        assert await store.zrem("k", "m", "absent") == 1
        assert not await store.exists("k")
