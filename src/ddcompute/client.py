"""
ddcompute - Compute API Client

This module composes the request execution engine with every resource
operation into the single client callers use.
"""

from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import ConfigurationError
from .core.models import ComputeConfig
from .domains.account import AccountOperations
from .domains.images import ImageOperations
from .domains.nat import NATOperations
from .domains.network_domains import NetworkDomainOperations


class ComputeClient(
    AccountOperations,
    NetworkDomainOperations,
    NATOperations,
    ImageOperations,
):
    """Client for the cloud compute API.

    Usage::

        from ddcompute import ComputeClient

        client = ComputeClient.create("au1", "user1", "password")
        client.configure_retry(3, 2.0)
        for domain in client.list_network_domains().domains:
            print(domain.name)
    """

    @classmethod
    def create(
        cls,
        region: str,
        username: str,
        password: str,
        transport: Optional[httpx.BaseTransport] = None,
        **config_options,
    ) -> "ComputeClient":
        """Create a client for the specified region.

        Args:
            region: Compute region identifier (e.g. "au1")
            username: Account username
            password: Account password
            transport: Optional httpx transport
            **config_options: Additional ``ComputeConfig`` fields (base_address, timeout, verify_ssl)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        try:
            config = ComputeConfig(
                region=region, username=username, password=password, **config_options
            )
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid compute API client configuration: {e}",
                context={"region": region},
            ) from e
        return cls(config, transport=transport)
