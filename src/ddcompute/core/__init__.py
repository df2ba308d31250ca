"""
ddcompute - Core Infrastructure

This package contains the request execution engine and its building blocks.
"""

from .client import BaseComputeClient, RequestResponseLogger
from .exceptions import (
    APIError,
    AuthenticationError,
    ComputeError,
    ConfigurationError,
    NetworkError,
    ResponseDecodeError,
    ResponseReadError,
    SerializationError,
    ValidationError,
)
from .models import ApiVersion, ComputeConfig
from .request_builder import RequestBuilder
from .responses import APIResponse, APIResponseV1, APIResponseV2, FieldMessage
from .retry import RetryPolicy, send_with_retry
from .state import ClientState

__all__ = [
    # Exceptions
    "ComputeError",
    "ConfigurationError",
    "ValidationError",
    "SerializationError",
    "NetworkError",
    "ResponseReadError",
    "ResponseDecodeError",
    "APIError",
    "AuthenticationError",
    # Models
    "ApiVersion",
    "ComputeConfig",
    # Engine
    "BaseComputeClient",
    "RequestResponseLogger",
    "RequestBuilder",
    "ClientState",
    # Responses
    "APIResponse",
    "APIResponseV1",
    "APIResponseV2",
    "FieldMessage",
    # Retry
    "RetryPolicy",
    "send_with_retry",
]
