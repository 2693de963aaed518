"""Cache store implementations."""

from .client import create_redis_client
from .memory import InMemoryCacheStore
from .redis_store import RedisCacheStore

__all__ = ["InMemoryCacheStore", "RedisCacheStore", "create_redis_client"]
