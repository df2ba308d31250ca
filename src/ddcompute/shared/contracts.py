"""
ddcompute - Common Data Contracts

Wire-format models shared by several resource types (entity references,
IP ranges, operating systems and virtual machine hardware).
"""

from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResourceType(str, Enum):
    """Well-known compute resource types."""

    NETWORK_DOMAIN = "NetworkDomain"
    VLAN = "VLAN"
    SERVER = "Server"
    NETWORK_ADAPTER = "NetworkAdapter"
    NAT_RULE = "NATRule"
    OS_IMAGE = "OSImage"
    CUSTOMER_IMAGE = "CustomerImage"


class WireModel(BaseModel):
    """Base for wire-format models (camelCase aliases, populate by field name).

    A JSON ``null`` is treated like an absent field, so the field takes its
    default. Required fields sent as ``null`` still fail validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class EntityReference(WireModel):
    """An entity Id and name, grouped for serialization."""

    id: str
    name: Optional[str] = None


class IPv4Range(WireModel):
    """An IPv4 network (base address and prefix size)."""

    base_address: str = Field(alias="address")
    prefix_size: int = Field(alias="prefixSize")

    def to_display_string(self) -> str:
        return f"{self.base_address}/{self.prefix_size}"


class IPv6Range(WireModel):
    """An IPv6 network (base address and prefix size)."""

    base_address: str = Field(alias="address")
    prefix_size: int = Field(alias="prefixSize")

    def to_display_string(self) -> str:
        return f"{self.base_address}/{self.prefix_size}"


class OperatingSystem(WireModel):
    """A well-known operating system for virtual machines."""

    id: str = ""
    family: str = ""
    display_name: str = Field(default="", alias="displayName")


class VirtualMachineCPU(WireModel):
    count: Optional[int] = None
    speed: Optional[str] = None
    cores_per_socket: Optional[int] = Field(default=None, alias="coresPerSocket")


class VirtualMachineDisk(WireModel):
    id: Optional[str] = None
    scsi_unit_id: int = Field(default=0, alias="scsiId")
    size_gb: int = Field(default=0, alias="sizeGb")
    speed: str = ""


class VirtualMachineNetworkAdapter(WireModel):
    """A virtual machine's network adapter.

    When deploying a new server, exactly one of ``vlan_id`` and
    ``private_ipv4_address`` must be specified. Adapters have no name; their
    Id doubles as one.
    """

    id: Optional[str] = None
    vlan_id: Optional[str] = Field(default=None, alias="vlanId")
    vlan_name: Optional[str] = Field(default=None, alias="vlanName")
    private_ipv4_address: Optional[str] = Field(default=None, alias="privateIpv4")
    private_ipv6_address: Optional[str] = Field(default=None, alias="ipv6")
    state: Optional[str] = None

    resource_type: ClassVar[ResourceType] = ResourceType.NETWORK_ADAPTER

    @property
    def name(self) -> Optional[str]:
        return self.id


class VirtualMachineNetwork(WireModel):
    network_domain_id: Optional[str] = Field(default=None, alias="networkDomainId")
    primary_adapter: VirtualMachineNetworkAdapter = Field(alias="primaryNic")
    additional_adapters: list[VirtualMachineNetworkAdapter] = Field(
        default_factory=list, alias="additionalNic"
    )
