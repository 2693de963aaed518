"""Process-wide readiness of the search index."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class SearchIndexState:
    """Readiness flags shared by every request in the process.

    ``lock`` serializes rebuilds; ``rebuilding`` lets callers report the
    rebuild without waiting on the lock.
    """

    ready: bool = False
    rebuilding: bool = False
    error: Optional[str] = None
    last_rebuilt_at: Optional[datetime] = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def mark_ready(self) -> None:
        self.ready = True
        self.error = None

    def mark_failed(self, error: str) -> None:
        self.ready = False
        self.error = error
