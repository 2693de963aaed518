"""Redis-backed cache store."""

import functools
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

import logfire
from redis.asyncio import Redis
from redis.exceptions import RedisError

from forum.domain.cache.store import CacheStore

T = TypeVar("T")


def best_effort(
    default: Any,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Turn Redis failures into a logged warning and a neutral return value."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self: "RedisCacheStore", *args: Any, **kwargs: Any) -> T:
            try:
                return await func(self, *args, **kwargs)
            except RedisError as e:
                logfire.warn(
                    "Redis operation failed",
                    operation=func.__name__,
                    key=str(args[0]) if args else None,
                    error=str(e),
                )
                return default() if callable(default) else default

        return wrapper

    return decorator


class RedisCacheStore(CacheStore):
    """Cache store on a shared ``redis.asyncio`` client."""

    def __init__(self, client: Redis, scan_batch_size: int = 100) -> None:
        self.client = client
        self.scan_batch_size = scan_batch_size

    @best_effort(None)
    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    @best_effort(list)
    async def get_many(self, keys: Sequence[str]) -> list[Optional[str]]:
        if not keys:
            return []
        return await self.client.mget(list(keys))

    @best_effort(False)
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        return bool(await self.client.set(key, value, ex=ttl))

    @best_effort(False)
    async def set_many(
        self, mapping: Mapping[str, str], ttl: Optional[int] = None
    ) -> bool:
        if not mapping:
            return True
        async with self.client.pipeline(transaction=False) as pipe:
            for key, value in mapping.items():
                pipe.set(key, value, ex=ttl)
            await pipe.execute()
        return True

    @best_effort(0)
    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return await self.client.delete(*keys)

    @best_effort(False)
    async def exists(self, key: str) -> bool:
        return bool(await self.client.exists(key))

    @best_effort(list)
    async def scan_keys(self, pattern: str) -> list[str]:
        return [
            key
            async for key in self.client.scan_iter(
                match=pattern, count=self.scan_batch_size
            )
        ]

    @best_effort(0)
    async def delete_pattern(self, pattern: str) -> int:
        removed = 0
        batch: list[str] = []
        async for key in self.client.scan_iter(
            match=pattern, count=self.scan_batch_size
        ):
            batch.append(key)
            if len(batch) >= self.scan_batch_size:
                removed += await self.client.delete(*batch)
                batch = []
        if batch:
            removed += await self.client.delete(*batch)
        logfire.debug("Deleted keys by pattern", pattern=pattern, removed=removed)
        return removed

    @best_effort(False)
    async def zadd_many(self, entries: Iterable[tuple[str, str, float]]) -> bool:
        async with self.client.pipeline(transaction=False) as pipe:
            for key, member, score in entries:
                pipe.zadd(key, {member: score})
            await pipe.execute()
        return True

    @best_effort(None)
    async def zincrby(self, key: str, member: str, amount: float) -> Optional[float]:
        return await self.client.zincrby(key, amount, member)

    @best_effort(0)
    async def zrem(self, key: str, *members: str) -> int:
        if not members:
            return 0
        return await self.client.zrem(key, *members)

    @best_effort(list)
    async def zrange_all(self, key: str) -> list[str]:
        return await self.client.zrange(key, 0, -1)

    @best_effort(list)
    async def zrevrange(self, key: str, start: int, stop: int) -> list[str]:
        return await self.client.zrevrange(key, start, stop)

    @best_effort(False)
    async def ping(self) -> bool:
        return bool(await self.client.ping())
