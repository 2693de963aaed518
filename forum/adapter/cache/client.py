"""Redis client construction."""

import logfire
from redis.asyncio import Redis

from forum.adapter.error import CacheError
from forum.config import RedisSettings


def create_redis_client(settings: RedisSettings) -> Redis:
    """Create an async Redis client from settings.

    The connection is lazy: nothing is opened until the first command.

    Raises:
        CacheError: If the URL cannot be parsed
    """
    try:
        client = Redis.from_url(
            settings.url,
            decode_responses=True,
            socket_timeout=settings.socket_timeout,
            socket_connect_timeout=settings.socket_connect_timeout,
        )
    except ValueError as e:
        raise CacheError(f"Invalid Redis URL: {e}") from e
    logfire.info("Redis client created", url=_redact(settings.url))
    return client


def _redact(url: str) -> str:
    """Hide the password part of a Redis URL."""
    scheme, sep, rest = url.partition("://")
    if "@" not in rest:
        return url
    return f"{scheme}{sep}***@{rest.split('@', 1)[1]}"
