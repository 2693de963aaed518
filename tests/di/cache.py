"""Mock cache provider for testing."""

from dishka import Scope, provide

from forum.adapter.cache import InMemoryCacheStore
from forum.domain.cache import CacheStore
from forum.util.di.infrastructure.cache import CacheProvider


class MockCacheProvider(CacheProvider):
    """Cache provider backed by a dictionary instead of Redis."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_cache_store(self) -> CacheStore:
        return InMemoryCacheStore()
