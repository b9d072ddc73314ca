"""
Background task owner for the expiration sweep.
"""

import asyncio
from typing import Optional

from shared.logging import get_logger
from .base import CacheBackend


class ExpirationSweeper:
    """Runs ``cache.invalidate_expired`` in one long-lived task.

    The sweep loop never returns on its own; :meth:`stop` cancels it.
    """

    def __init__(self, cache: CacheBackend, interval: float = 1.0):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.cache = cache
        self.interval = interval
        self.logger = get_logger("cache.sweeper")
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self):
        """Start the sweeper."""
        if self.running:
            return
        self._task = asyncio.create_task(
            self.cache.invalidate_expired(self.interval),
            name="cache-expiration-sweeper",
        )
        self._task.add_done_callback(self._on_done)
        self.logger.info("Cache sweeper started", backend=self.cache.backend_name, interval=self.interval)

    async def stop(self):
        """Stop the sweeper."""
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.logger.info("Cache sweeper stopped")

    def _on_done(self, task: asyncio.Task):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error("Cache sweeper crashed", error=str(error), error_type=type(error).__name__)
        else:
            self.logger.warning("Cache sweeper exited without being stopped")
