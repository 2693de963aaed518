"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from redis.asyncio import Redis

from forum.adapter.cache import RedisCacheStore, create_redis_client
from forum.config import CacheSettings, Settings
from forum.domain.cache import CacheStore
from forum.util.di.base import ProviderBase
from forum.util.observability import instrument_redis


class CacheProvider(ProviderBase):
    """Cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider backed by Redis."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_redis_client(self, settings: Settings) -> AsyncIterator[Redis]:
        """Provide the shared Redis client, closed with the container."""
        instrument_redis()
        client = create_redis_client(settings.redis)
        yield client
        await client.aclose()
        logfire.info("Redis client closed")

    @provide(scope=Scope.APP)
    def get_cache_store(self, client: Redis, settings: CacheSettings) -> CacheStore:
        return RedisCacheStore(client, scan_batch_size=settings.scan_batch_size)
