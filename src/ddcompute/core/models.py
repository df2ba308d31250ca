"""
ddcompute - Configuration Models

This module contains the Pydantic model for client configuration and the
enumeration of supported API generations.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..shared.constants import (
    API_V1_PREFIX,
    API_V22_PREFIX,
    BASE_ADDRESS_TEMPLATE,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_XML,
)


class ApiVersion(str, Enum):
    """Compute API generation (selects URI prefix and wire format)."""

    V1 = "1"
    V22 = "2.2"

    @property
    def prefix(self) -> str:
        return API_V1_PREFIX if self is ApiVersion.V1 else API_V22_PREFIX

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_XML if self is ApiVersion.V1 else CONTENT_TYPE_JSON


class ComputeConfig(BaseModel):
    """Configuration for a compute API client.

    Instances are immutable, so a derived base address always matches the region.
    """

    model_config = ConfigDict(frozen=True)

    region: str = Field(..., description="Compute region identifier (e.g. 'au1')")
    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password", repr=False)  # Hide in logs
    base_address: str | None = Field(
        default=None, description="Override for the region-derived base address"
    )
    timeout: float = Field(default=30.0, gt=0, description="Per-attempt timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Whether to verify SSL certificates")

    @field_validator("region")
    @classmethod
    def validate_region(cls, v):
        """Validate region identifier."""
        v = v.strip()
        if not v:
            raise ValueError("Region identifier must not be empty")
        return v

    @field_validator("base_address")
    @classmethod
    def validate_base_address(cls, v):
        """Validate base address format."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base address must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="before")
    @classmethod
    def derive_base_address(cls, data):
        """Derive the base address from the region unless one is supplied."""
        if not isinstance(data, dict) or data.get("base_address") is not None:
            return data
        region = data.get("region")
        if isinstance(region, str):
            data = {**data, "base_address": BASE_ADDRESS_TEMPLATE.format(region=region.strip())}
        return data
