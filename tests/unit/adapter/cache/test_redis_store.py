"""Unit tests for RedisCacheStore failure handling."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from forum.adapter.cache import RedisCacheStore


class UnreachableRedis:
    """Client whose every command fails as if Redis were down."""

    async def _fail(self, *args, **kwargs):
        raise RedisConnectionError("Connection refused")

    get = mget = set = delete = exists = zincrby = zrem = zrange = _fail
    zrevrange = ping = _fail


class TestBestEffort:
    """Redis failures degrade to cache misses instead of errors."""

    @pytest.mark.asyncio
    async def test_get_returns_none(self):
        store = RedisCacheStore(UnreachableRedis())

        assert await store.get("posts:1") is None

    @pytest.mark.asyncio
    async def test_get_many_returns_empty_list(self):
        store = RedisCacheStore(UnreachableRedis())

        assert await store.get_many(["a", "b"]) == []

    @pytest.mark.asyncio
    async def test_writes_report_failure(self):
        store = RedisCacheStore(UnreachableRedis())

        assert await store.set("posts:1", "{}", ttl=10) is False
        assert await store.delete("posts:1") == 0

    @pytest.mark.asyncio
    async def test_ping_reports_unhealthy(self):
        store = RedisCacheStore(UnreachableRedis())

        assert await store.ping() is False
