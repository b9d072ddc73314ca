"""
Shared error handling for the cache service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class CacheServiceException(Exception):
    """Base exception for cache service errors."""

    http_status = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class CacheBackendError(CacheServiceException):
    """Backend I/O failure. Never used to signal a missing key."""

    def __init__(self, message: str = "Cache backend error", details: Optional[Dict[str, Any]] = None):
        super().__init__("CACHE_BACKEND_ERROR", message, details)


class CacheSerializationError(CacheBackendError):
    """A value could not be encoded for the backend."""

    def __init__(self, message: str = "Cache value serialization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.code = "CACHE_SERIALIZATION_ERROR"


class CacheConfigurationError(CacheServiceException):
    """Backend could not be constructed from configuration. Fatal at startup."""

    def __init__(self, message: str = "Invalid cache configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CACHE_CONFIGURATION_ERROR", message, details)
