"""
Backend contract shared by every cache implementation.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A stored value and the monotonic instant after which it is dead."""
    value: T
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


def check_ttl(ttl: int) -> int:
    """Reject negative TTLs. Zero is valid and expires immediately."""
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise TypeError(f"ttl must be an int, got {type(ttl).__name__}")
    if ttl < 0:
        raise ValueError(f"ttl must be >= 0, got {ttl}")
    return ttl


class CacheBackend(ABC, Generic[T]):
    """Capability set every cache backend implements.

    A missing key is reported as ``None`` by :meth:`retrieve_item`, never
    as an exception. :class:`shared.errors.CacheBackendError` is reserved
    for backend I/O failures.
    """

    backend_name = "abstract"

    @abstractmethod
    async def insert_item(self, key: str, value: T, ttl: int) -> None:
        """Store or overwrite ``key``; it stops being retrievable after ``ttl`` seconds."""

    @abstractmethod
    async def retrieve_item(self, key: str) -> Optional[T]:
        """Return the live value for ``key`` or ``None`` if absent or expired."""

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete ``key`` if present. Removing an absent key is not an error."""

    @abstractmethod
    async def purge_expired(self) -> int:
        """Run a single sweep pass and return the number of entries reclaimed."""

    async def invalidate_expired(self, interval: float) -> None:
        """Sweep expired entries every ``interval`` seconds.

        Never returns; the owning task is cancelled at shutdown. Backends
        whose store expires keys natively still keep this shape and simply
        reclaim nothing on each tick.
        """
        while True:
            await asyncio.sleep(interval)
            await self.purge_expired()

    async def health_check(self) -> bool:
        """Check backend health."""
        return True

    async def close(self) -> None:
        """Release backend resources."""
