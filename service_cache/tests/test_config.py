"""
Unit tests for cache service configuration and error types.
"""

import pytest
from pydantic import ValidationError

from shared.config import get_config
from shared.errors import (
    CacheBackendError, CacheConfigurationError, CacheSerializationError, CacheServiceException
)


class TestServiceConfig:
    """Test cases for ServiceConfig."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        """Remove cache settings inherited from the environment."""
        for name in (
            "CACHE_BACKEND", "REDIS_URL", "REDIS_MAX_CONNECTIONS", "REDIS_POOL_TIMEOUT",
            "CACHE_SWEEP_INTERVAL", "LOG_LEVEL", "CACHE_ENV", "CACHE_HOST",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        """Test defaults select the in-memory backend."""
        config = get_config("cache", 8080)

        assert config.service_name == "cache"
        assert config.port == 8080
        assert config.cache_backend == "in_memory"
        assert config.redis_url is None
        assert config.sweep_interval_seconds == 1.0
        assert config.redis_max_connections == 10

    def test_reads_environment(self, monkeypatch):
        """Test backend selection comes from the environment."""
        monkeypatch.setenv("CACHE_BACKEND", "redis")
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
        monkeypatch.setenv("REDIS_MAX_CONNECTIONS", "25")
        monkeypatch.setenv("CACHE_SWEEP_INTERVAL", "0.5")

        config = get_config("cache", 8080)

        assert config.cache_backend == "redis"
        assert config.redis_url == "redis://cache:6379/1"
        assert config.redis_max_connections == 25
        assert config.sweep_interval_seconds == 0.5

    def test_overrides_win_over_environment(self, monkeypatch):
        """Test explicit overrides take precedence."""
        monkeypatch.setenv("CACHE_BACKEND", "redis")

        config = get_config("cache", 8080, cache_backend="in_memory")

        assert config.cache_backend == "in_memory"

    def test_rejects_non_positive_sweep_interval(self):
        """Test the sweep interval must be positive."""
        with pytest.raises(ValidationError):
            get_config("cache", 8080, sweep_interval_seconds=0)


class TestErrors:
    """Test cases for the cache error hierarchy."""

    def test_backend_error_response(self):
        """Test conversion to the error response model."""
        error = CacheBackendError("Redis get failed", details={"key": "a"})

        response = error.to_response("req-1")

        assert response.code == "CACHE_BACKEND_ERROR"
        assert response.message == "Redis get failed"
        assert response.details == {"key": "a"}
        assert response.request_id == "req-1"

    def test_serialization_error_is_backend_error(self):
        """Test serialization failures travel the backend error channel."""
        error = CacheSerializationError()

        assert isinstance(error, CacheBackendError)
        assert error.code == "CACHE_SERIALIZATION_ERROR"

    def test_configuration_error_is_not_backend_error(self):
        """Test startup failures are kept apart from request-time failures."""
        error = CacheConfigurationError("REDIS_URL must be set")

        assert isinstance(error, CacheServiceException)
        assert not isinstance(error, CacheBackendError)
