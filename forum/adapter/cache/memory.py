"""In-process cache store.

Backs the test container and local runs without Redis. Keys expire lazily
when they are read.
"""

import fnmatch
import time
from typing import Iterable, Mapping, Optional, Sequence

from forum.domain.cache.store import CacheStore


class InMemoryCacheStore(CacheStore):
    """Dictionary-backed cache store with TTLs and sorted sets."""

    def __init__(self) -> None:
        self._values: dict[str, tuple[str, Optional[float]]] = {}
        self._sorted_sets: dict[str, dict[str, float]] = {}

    def _alive(self, key: str) -> bool:
        entry = self._values.get(key)
        if entry is None:
            return False
        expires_at = entry[1]
        if expires_at is not None and expires_at <= time.monotonic():
            del self._values[key]
            return False
        return True

    def _all_keys(self) -> list[str]:
        live = [key for key in list(self._values) if self._alive(key)]
        return live + list(self._sorted_sets)

    async def get(self, key: str) -> Optional[str]:
        return self._values[key][0] if self._alive(key) else None

    async def get_many(self, keys: Sequence[str]) -> list[Optional[str]]:
        return [await self.get(key) for key in keys]

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        expires_at = time.monotonic() + ttl if ttl else None
        self._values[key] = (value, expires_at)
        return True

    async def set_many(
        self, mapping: Mapping[str, str], ttl: Optional[int] = None
    ) -> bool:
        for key, value in mapping.items():
            await self.set(key, value, ttl)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._alive(key):
                del self._values[key]
                removed += 1
            elif self._sorted_sets.pop(key, None) is not None:
                removed += 1
        return removed

    async def exists(self, key: str) -> bool:
        return self._alive(key) or key in self._sorted_sets

    async def scan_keys(self, pattern: str) -> list[str]:
        return [key for key in self._all_keys() if fnmatch.fnmatchcase(key, pattern)]

    async def delete_pattern(self, pattern: str) -> int:
        return await self.delete(*await self.scan_keys(pattern))

    async def zadd_many(self, entries: Iterable[tuple[str, str, float]]) -> bool:
        for key, member, score in entries:
            self._sorted_sets.setdefault(key, {})[member] = score
        return True

    async def zincrby(self, key: str, member: str, amount: float) -> Optional[float]:
        members = self._sorted_sets.setdefault(key, {})
        members[member] = members.get(member, 0) + amount
        return members[member]

    async def zrem(self, key: str, *members: str) -> int:
        sorted_set = self._sorted_sets.get(key, {})
        removed = sum(
            1 for member in members if sorted_set.pop(member, None) is not None
        )
        if key in self._sorted_sets and not sorted_set:
            del self._sorted_sets[key]
        return removed

    def _ranked(self, key: str) -> list[str]:
        # Redis orders equal scores lexicographically by member
        members = self._sorted_sets.get(key, {})
        ranked = sorted(members.items(), key=lambda item: (item[1], item[0]))
        return [member for member, _ in ranked]

    async def zrange_all(self, key: str) -> list[str]:
        return self._ranked(key)

    async def zrevrange(self, key: str, start: int, stop: int) -> list[str]:
        ranked = list(reversed(self._ranked(key)))
        end = None if stop == -1 else stop + 1
        return ranked[start:end]

    async def ping(self) -> bool:
        return True
