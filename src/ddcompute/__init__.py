"""
ddcompute

A client library for the Dimension Data cloud compute API, covering both the
legacy XML (v1) and current JSON (v2.2) API generations.
"""

__version__ = "1.0.0"

from .client import ComputeClient
from .core.exceptions import (
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
from .core.models import ApiVersion, ComputeConfig
from .domains.account import Account, Role
from .domains.images import CustomerImage, CustomerImages, OSImage, OSImages
from .domains.nat import NATRule, NATRules
from .domains.network_domains import NetworkDomain, NetworkDomains
from .shared.paging import Paging

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
    # Core classes
    "ApiVersion",
    "ComputeConfig",
    "ComputeClient",
    "Paging",
    # Entities
    "Account",
    "Role",
    "NetworkDomain",
    "NetworkDomains",
    "NATRule",
    "NATRules",
    "OSImage",
    "OSImages",
    "CustomerImage",
    "CustomerImages",
]
