"""
Request models for the Cache Service.
"""

from pydantic import BaseModel, Field


class CacheItem(BaseModel):
    """Item stored through ``POST /cache``."""

    key: str = Field(..., description="Cache key")
    data: str = Field(..., description="Payload returned verbatim on read")
    ttl: int = Field(..., ge=0, description="Seconds until the item expires; 0 expires immediately")
