"""Key-value cache store interface.

The cache is an accelerator, never a source of truth: implementations must
not raise on backend failures. A failed read behaves like a miss and a failed
write is dropped, so every caller keeps working from the database alone.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional, Sequence


class CacheStore(ABC):
    """String key-value store with TTLs and sorted sets."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value for a key, or None on a miss."""
        pass

    @abstractmethod
    async def get_many(self, keys: Sequence[str]) -> list[Optional[str]]:
        """Return the values for several keys, None for each miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """Store a value, expiring after ``ttl`` seconds when given.

        Returns:
            True if the value was stored
        """
        pass

    @abstractmethod
    async def set_many(
        self, mapping: Mapping[str, str], ttl: Optional[int] = None
    ) -> bool:
        """Store several values in one round trip."""
        pass

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """Delete keys. Returns the number of keys removed."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return True if the key is present."""
        pass

    @abstractmethod
    async def scan_keys(self, pattern: str) -> list[str]:
        """Return every key matching a glob pattern.

        Implementations iterate incrementally and never block the backend.
        """
        pass

    @abstractmethod
    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern.

        Returns:
            Number of keys removed
        """
        pass

    @abstractmethod
    async def zadd_many(self, entries: Iterable[tuple[str, str, float]]) -> bool:
        """Add ``(key, member, score)`` entries to sorted sets in one batch."""
        pass

    @abstractmethod
    async def zincrby(self, key: str, member: str, amount: float) -> Optional[float]:
        """Increment a member's score. Returns the new score."""
        pass

    @abstractmethod
    async def zrem(self, key: str, *members: str) -> int:
        """Remove members from a sorted set. Returns the number removed."""
        pass

    @abstractmethod
    async def zrange_all(self, key: str) -> list[str]:
        """Return every member of a sorted set, lowest score first."""
        pass

    @abstractmethod
    async def zrevrange(self, key: str, start: int, stop: int) -> list[str]:
        """Return members by rank, highest score first (``stop`` inclusive)."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the backend is reachable."""
        pass
