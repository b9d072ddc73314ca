"""
Cache service: a key-value store with per-item TTL.
"""

from typing import Dict, Optional

from fastapi import HTTPException, Response
from fastapi.responses import PlainTextResponse

from shared.base_service import BaseService
from shared.errors import CacheBackendError, ErrorResponse

from .cache.base import CacheBackend
from .cache.factory import initialize_cache
from .cache.sweeper import ExpirationSweeper
from .models import CacheItem


class CacheService(BaseService):
    """Cache service implementation."""

    def __init__(self, **config_overrides):
        super().__init__("cache", 8080, **config_overrides)

        # Built once in start(); shared by the handlers and the sweeper
        self.cache: Optional[CacheBackend[str]] = None
        self.sweeper: Optional[ExpirationSweeper] = None

        self._setup_cache_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.cache_service = self

    def _get_cache(self) -> CacheBackend[str]:
        if self.cache is None:
            raise CacheBackendError("Cache backend is not initialized")
        return self.cache

    def _setup_cache_routes(self):
        """Set up cache-specific routes."""

        error_responses = {500: {"model": ErrorResponse, "description": "Internal server error"}}

        @self.app.get("/", response_class=PlainTextResponse)
        async def root():
            """Root endpoint."""
            return "..: Cache Service"

        @self.app.post("/cache", responses=error_responses)
        async def create_item(item: CacheItem):
            """Create or replace a cache item."""
            self.metrics.increment_counter("requests")
            self.metrics.increment_counter("writes")

            await self._get_cache().insert_item(item.key, item.data, item.ttl)
            self.logger.debug("Cache item stored", key=item.key, ttl=item.ttl)
            return Response(status_code=200)

        @self.app.get(
            "/cache/{key}",
            response_class=PlainTextResponse,
            responses={404: {"description": "Cache item not found"}, **error_responses},
        )
        async def retrieve_item(key: str):
            """Retrieve a live cache item."""
            self.metrics.increment_counter("requests")
            self.metrics.increment_counter("reads")

            data = await self._get_cache().retrieve_item(key)
            if not isinstance(data, str):
                if data is not None:
                    # Written by another Redis client; not an item this service stored
                    self.logger.warning("Ignoring non-text cached value", key=key)
                raise HTTPException(status_code=404, detail="Cache item not found")
            return PlainTextResponse(data)

        @self.app.delete("/cache/{key}", responses=error_responses)
        async def remove_item(key: str):
            """Delete a cache item. Deleting an absent key succeeds."""
            self.metrics.increment_counter("requests")
            self.metrics.increment_counter("writes")

            await self._get_cache().remove_item(key)
            return Response(status_code=200)

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check cache service dependencies."""
        if self.cache is None:
            return {"cache": "error"}
        return {"cache": "ok" if await self.cache.health_check() else "error"}

    async def start(self):
        """Start cache service components."""
        self.cache = await initialize_cache(self.config)
        self.sweeper = ExpirationSweeper(self.cache, self.config.sweep_interval_seconds)
        await self.sweeper.start()

        self.logger.info("Cache service started", backend=self.cache.backend_name)

    async def stop(self):
        """Stop cache service components."""
        if self.sweeper:
            await self.sweeper.stop()
        if self.cache:
            await self.cache.close()

        self.logger.info("Cache service stopped")


def create_app(**config_overrides):
    """Create cache service application."""
    service = CacheService(**config_overrides)
    return service.app


if __name__ == "__main__":
    service = CacheService()
    service.run()
