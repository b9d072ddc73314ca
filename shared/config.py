"""
Shared configuration management for the cache service.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="CACHE_ENV")
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    # Cache backend selection
    cache_backend: str = Field(default="in_memory", validation_alias="CACHE_BACKEND")
    sweep_interval_seconds: float = Field(default=1.0, gt=0, validation_alias="CACHE_SWEEP_INTERVAL")

    # Redis backend
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")
    redis_max_connections: int = Field(default=10, ge=1, validation_alias="REDIS_MAX_CONNECTIONS")
    redis_pool_timeout: float = Field(default=5.0, gt=0, validation_alias="REDIS_POOL_TIMEOUT")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = Field(default="0.0.0.0", validation_alias="CACHE_HOST")

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
