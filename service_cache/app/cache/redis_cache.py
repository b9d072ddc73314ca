"""
Redis-backed cache backend.
"""

import json
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.logging import get_logger
from shared.errors import CacheBackendError, CacheSerializationError
from .base import CacheBackend, T, check_ttl


class RedisCache(CacheBackend[T]):
    """Cache backend delegating expiry to Redis.

    Values are stored as JSON text with ``SET key value EX ttl``; Redis
    drops them on its own clock, so there is nothing to sweep.

    A stored value that no longer decodes as JSON is reported as absent
    rather than raised. Transport failures are raised as
    :class:`CacheBackendError` from every operation, including reads.
    """

    backend_name = "redis"

    def __init__(self, client: redis.Redis):
        self.redis = client
        self.logger = get_logger("cache.redis")
        self._sweep_notice_logged = False

    @classmethod
    def from_url(cls, redis_url: str, max_connections: int = 10, pool_timeout: float = 5.0) -> "RedisCache":
        """Build a cache over a bounded connection pool.

        Raises ``ValueError`` for a malformed URL. Waiting longer than
        ``pool_timeout`` for a free connection fails the operation.
        """
        pool = redis.BlockingConnectionPool.from_url(
            redis_url,
            max_connections=max_connections,
            timeout=pool_timeout,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30,
        )
        return cls(redis.Redis(connection_pool=pool))

    async def insert_item(self, key: str, value: T, ttl: int) -> None:
        check_ttl(ttl)
        payload = self._encode(key, value)

        try:
            if ttl == 0:
                # Redis rejects EX 0; an immediately-expired entry is a delete
                self.logger.debug("Zero TTL insert treated as delete", key=key)
                await self.redis.delete(key)
            else:
                await self.redis.set(key, payload, ex=ttl)
        except (RedisError, OSError) as e:
            self.logger.error("Redis insert failed", key=key, error=str(e))
            raise CacheBackendError(
                f"Redis insert failed: {e}",
                details={"key": key, "operation": "insert"}
            ) from e

    async def retrieve_item(self, key: str) -> Optional[T]:
        try:
            cached_data = await self.redis.get(key)
        except (RedisError, OSError) as e:
            self.logger.error("Redis get failed", key=key, error=str(e))
            raise CacheBackendError(
                f"Redis get failed: {e}",
                details={"key": key, "operation": "retrieve"}
            ) from e

        if cached_data is None:
            return None
        return self._decode(key, cached_data)

    async def remove_item(self, key: str) -> None:
        try:
            await self.redis.delete(key)
        except (RedisError, OSError) as e:
            self.logger.error("Redis delete failed", key=key, error=str(e))
            raise CacheBackendError(
                f"Redis delete failed: {e}",
                details={"key": key, "operation": "remove"}
            ) from e

    async def purge_expired(self) -> int:
        if not self._sweep_notice_logged:
            self.logger.info("Redis handles expiration internally, no need to manually invalidate")
            self._sweep_notice_logged = True
        return 0

    async def health_check(self) -> bool:
        try:
            await self.redis.ping()
            return True
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        await self.redis.aclose()
        await self.redis.connection_pool.disconnect()
        self.logger.info("Redis cache closed")

    def _encode(self, key: str, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(
                f"Failed to serialize value for key {key}: {e}",
                details={"key": key}
            ) from e

    def _decode(self, key: str, cached_data: Any) -> Optional[T]:
        if isinstance(cached_data, bytes):
            cached_data = cached_data.decode("utf-8", errors="replace")
        try:
            return json.loads(cached_data)
        except (TypeError, json.JSONDecodeError):
            self.logger.warning("Discarding undecodable cached value", key=key)
            return None
