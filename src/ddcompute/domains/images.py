"""
ddcompute - Image Domain

Virtual machine images: OS images supplied by the provider and customer images
created or imported by the organization. Both kinds share one shape.

The module supports:
- Retrieving an image by Id
- Finding an image by name within a data centre
- Listing the images in a data centre with paging
"""

from typing import ClassVar, Optional, Type, TypeVar
from urllib.parse import urlencode

from pydantic import Field

from ..core.client import BaseComputeClient
from ..core.exceptions import APIError
from ..core.models import ApiVersion
from ..core.responses import decode_json_entity, read_api_response_v2
from ..shared.constants import (
    API_CUSTOMER_IMAGE_GET,
    API_CUSTOMER_IMAGE_LIST,
    API_OS_IMAGE_GET,
    API_OS_IMAGE_LIST,
    RESPONSE_CODE_RESOURCE_NOT_FOUND,
)
from ..shared.contracts import (
    EntityReference,
    OperatingSystem,
    ResourceType,
    VirtualMachineCPU,
    VirtualMachineDisk,
    WireModel,
)
from ..shared.paging import PagedResult, Paging, ensure_paging


class Image(WireModel):
    """Fields common to OS and customer images."""

    id: str
    name: str = ""
    description: str = ""
    datacenter_id: str = Field(default="", alias="datacenterId")
    operating_system: OperatingSystem = Field(default_factory=OperatingSystem, alias="operatingSystem")
    cpu: VirtualMachineCPU = Field(default_factory=VirtualMachineCPU)
    memory_gb: int = Field(default=0, alias="memoryGb")
    disks: list[VirtualMachineDisk] = Field(default_factory=list, alias="disk")
    create_time: Optional[str] = Field(default=None, alias="createTime")

    def to_entity_reference(self) -> EntityReference:
        return EntityReference(id=self.id, name=self.name)


class OSImage(Image):
    """A provider-supplied virtual machine image."""

    os_image_key: Optional[str] = Field(default=None, alias="osImageKey")

    resource_type: ClassVar[ResourceType] = ResourceType.OS_IMAGE


class CustomerImage(Image):
    """A custom virtual machine image."""

    resource_type: ClassVar[ResourceType] = ResourceType.CUSTOMER_IMAGE


class OSImages(PagedResult):
    """A page of OS images."""

    images: list[OSImage] = Field(default_factory=list, alias="osImage")


class CustomerImages(PagedResult):
    """A page of customer images."""

    images: list[CustomerImage] = Field(default_factory=list, alias="customerImage")


ImageT = TypeVar("ImageT", bound=Image)
ImagesT = TypeVar("ImagesT", OSImages, CustomerImages)


class ImageOperations(BaseComputeClient):
    """OS and customer image operations."""

    # ========== OS IMAGES ==========

    def get_os_image(self, id: str) -> Optional[OSImage]:
        """Retrieve an OS image by Id (None if not found)."""
        return self._get_image(OSImage, API_OS_IMAGE_GET, "OS image", id)

    def find_os_image(self, name: str, datacenter_id: str) -> Optional[OSImage]:
        """Find an OS image by name in a data centre (None if there is no match)."""
        return self._find_image(OSImages, API_OS_IMAGE_LIST, "OS image", name, datacenter_id)

    def list_os_images_in_datacenter(
        self, datacenter_id: str, paging: Optional[Paging] = None
    ) -> OSImages:
        """List the OS images in a data centre."""
        return self._list_images(OSImages, API_OS_IMAGE_LIST, "OS images", datacenter_id, paging)

    # ========== CUSTOMER IMAGES ==========

    def get_customer_image(self, id: str) -> Optional[CustomerImage]:
        """Retrieve a customer image by Id (None if not found)."""
        return self._get_image(CustomerImage, API_CUSTOMER_IMAGE_GET, "customer image", id)

    def find_customer_image(self, name: str, datacenter_id: str) -> Optional[CustomerImage]:
        """Find a customer image by name in a data centre (None if there is no match)."""
        return self._find_image(
            CustomerImages, API_CUSTOMER_IMAGE_LIST, "customer image", name, datacenter_id
        )

    def list_customer_images_in_datacenter(
        self, datacenter_id: str, paging: Optional[Paging] = None
    ) -> CustomerImages:
        """List the customer images in a data centre."""
        return self._list_images(
            CustomerImages, API_CUSTOMER_IMAGE_LIST, "customer images", datacenter_id, paging
        )

    # ========== HELPERS ==========

    def _get_image(self, model: Type[ImageT], uri_template: str, kind: str, id: str) -> Optional[ImageT]:
        organization_id = self.get_organization_id()

        request_uri = uri_template.format(org_id=organization_id, id=id)
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            if api_response.response_code == RESPONSE_CODE_RESOURCE_NOT_FOUND:
                return None

            raise api_response.to_error(f"Request to retrieve {kind} '{id}'", status_code)

        return decode_json_entity(model, response_body, status_code)

    def _find_image(
        self, model: Type[ImagesT], uri_template: str, kind: str, name: str, datacenter_id: str
    ):
        organization_id = self.get_organization_id()

        query = urlencode({"name": name, "datacenterId": datacenter_id})
        request_uri = f"{uri_template.format(org_id=organization_id)}?{query}"
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            raise api_response.to_error(
                f"Request to find {kind} '{name}' in data centre '{datacenter_id}'", status_code
            )

        images = decode_json_entity(model, response_body, status_code)
        if images.is_empty() or not images.images:
            return None

        if images.page_count != 1:
            raise APIError(
                f"Found multiple images ({images.total_count}) matching '{name}' "
                f"in data centre '{datacenter_id}'.",
                status_code=status_code,
            )

        return images.images[0]

    def _list_images(
        self,
        model: Type[ImagesT],
        uri_template: str,
        kind: str,
        datacenter_id: str,
        paging: Optional[Paging],
    ) -> ImagesT:
        organization_id = self.get_organization_id()

        query = urlencode(
            {"datacenterId": datacenter_id, **ensure_paging(paging).to_query_parameters()}
        )
        request_uri = f"{uri_template.format(org_id=organization_id)}?{query}"
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            raise api_response.to_error(
                f"Request to list {kind} in data centre '{datacenter_id}'", status_code
            )

        return decode_json_entity(model, response_body, status_code)
