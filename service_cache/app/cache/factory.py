"""
Backend selection for the Cache Service.
"""

from redis.exceptions import RedisError

from shared.config import BaseConfig
from shared.errors import CacheConfigurationError
from shared.logging import get_logger
from .base import CacheBackend
from .in_memory_cache import InMemoryCache
from .redis_cache import RedisCache

logger = get_logger("cache.factory")

IN_MEMORY_BACKENDS = ("in_memory", "memory", "")


async def initialize_cache(config: BaseConfig) -> CacheBackend[str]:
    """Build the single cache backend selected by configuration.

    ``cache_backend == "redis"`` selects Redis; any other value falls back
    to the in-memory store. Raises :class:`CacheConfigurationError` when
    the Redis backend cannot be built, which must abort startup.
    """
    backend = (config.cache_backend or "").strip().lower()

    if backend == "redis":
        return await _initialize_redis(config)

    if backend not in IN_MEMORY_BACKENDS:
        logger.warning("Unknown cache backend, falling back to in-memory", cache_backend=config.cache_backend)

    logger.info("Using in-memory cache backend")
    return InMemoryCache()


async def _initialize_redis(config: BaseConfig) -> RedisCache:
    if not config.redis_url:
        raise CacheConfigurationError("REDIS_URL must be set when CACHE_BACKEND is redis")

    try:
        cache = RedisCache.from_url(
            config.redis_url,
            max_connections=config.redis_max_connections,
            pool_timeout=config.redis_pool_timeout,
        )
    except ValueError as e:
        raise CacheConfigurationError("Invalid Redis URL", details={"error": str(e)}) from e

    try:
        await cache.redis.ping()
    except (RedisError, OSError) as e:
        await cache.close()
        logger.error("Failed to connect to Redis", error=str(e))
        raise CacheConfigurationError("Failed to connect to Redis", details={"error": str(e)}) from e

    logger.info(
        "Using Redis cache backend",
        max_connections=config.redis_max_connections,
        pool_timeout=config.redis_pool_timeout,
    )
    return cache
