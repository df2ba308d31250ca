"""
ddcompute - Exception Hierarchy

This module contains all exceptions raised by the compute API client.
Every failure is surfaced to the immediate caller as one of these types.
"""

from datetime import datetime, timezone
from typing import Any


class ComputeError(Exception):
    """Base exception for all compute API client errors with enhanced context."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(ComputeError):
    """Client not configured or invalid configuration."""


class ValidationError(ComputeError):
    """Input parameter validation failed."""


class SerializationError(ValidationError):
    """Request body could not be serialized in the protocol's wire format."""


class NetworkError(ComputeError):
    """Transport-level failure before any HTTP response was received."""

    def __init__(self, method: str, url: str, cause: Exception):
        super().__init__(
            f"Unexpected error while performing '{method}' request to '{url}': {cause}",
            context={"method": method, "url": url, "error": str(cause)},
        )
        self.method = method
        self.url = url
        self.cause = cause


class ResponseReadError(ComputeError):
    """A response was received but its body could not be read."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(
            f"Error reading response body for '{url}': {cause}",
            context={"url": url, "error": str(cause)},
        )
        self.url = url
        self.cause = cause


class ResponseDecodeError(ComputeError):
    """Response body could not be parsed as the expected wire format."""


class APIError(ComputeError):
    """API call failed with a well-formed (or at least understood) error response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_code: str | None = None,
        api_message: str | None = None,
    ):
        super().__init__(
            message,
            context={
                "status_code": status_code,
                "response_code": response_code,
            },
        )
        self.status_code = status_code
        self.response_code = response_code
        self.api_message = api_message


class AuthenticationError(APIError):
    """Authentication failed (HTTP 401)."""

    MESSAGE = "Cannot connect to compute API (invalid credentials)."

    def __init__(self, status_code: int = 401):
        super().__init__(self.MESSAGE, status_code=status_code)
