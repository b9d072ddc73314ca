"""
Process-local cache backend.
"""

import time
from typing import Callable, Dict, Optional

from shared.logging import get_logger
from .base import CacheBackend, CacheEntry, T, check_ttl
from .rwlock import ReadWriteLock


class InMemoryCache(CacheBackend[T]):
    """In-memory key-value store with per-entry expiry.

    Reads check the expiry instant and report dead entries as absent
    without removing them; :meth:`purge_expired` reclaims them. Both
    mechanisms are needed: the read-time check hides an entry the moment
    its TTL elapses, and the sweep frees keys nobody reads again.

    Values are returned as stored, so callers must treat them as
    immutable.
    """

    backend_name = "in_memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._store: Dict[str, CacheEntry[T]] = {}
        self._lock = ReadWriteLock()
        self._clock = clock
        self.logger = get_logger("cache.in_memory")

    def __len__(self) -> int:
        return len(self._store)

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        return len(self)

    async def insert_item(self, key: str, value: T, ttl: int) -> None:
        check_ttl(ttl)
        async with self._lock.write():
            self._store[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    async def retrieve_item(self, key: str) -> Optional[T]:
        async with self._lock.read():
            entry = self._store.get(key)
            if entry is not None and entry.is_live(self._clock()):
                return entry.value
        return None

    async def remove_item(self, key: str) -> None:
        async with self._lock.write():
            self._store.pop(key, None)

    async def purge_expired(self) -> int:
        async with self._lock.write():
            now = self._clock()
            expired = [key for key, entry in self._store.items() if not entry.is_live(now)]
            for key in expired:
                del self._store[key]

        if expired:
            self.logger.debug("Purged expired entries", removed=len(expired), remaining=len(self._store))
        return len(expired)
