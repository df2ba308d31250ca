"""
ddcompute - Network Domain Domain

A network domain is the top-level container for a customer's VLANs, servers,
firewall rules and NAT rules within a data centre.

The module supports:
- Listing network domains with paging
- Retrieving a network domain by Id
- Deploying and deleting network domains
"""

import logging
from typing import ClassVar, Optional
from urllib.parse import urlencode

from pydantic import Field

from ..core.client import BaseComputeClient
from ..core.models import ApiVersion
from ..core.responses import decode_json_entity, read_api_response_v2
from ..shared.constants import (
    API_NETWORK_DOMAIN_DELETE,
    API_NETWORK_DOMAIN_DEPLOY,
    API_NETWORK_DOMAIN_GET,
    API_NETWORK_DOMAIN_LIST,
    FIELD_NETWORK_DOMAIN_ID,
    RESPONSE_CODE_IN_PROGRESS,
    RESPONSE_CODE_RESOURCE_NOT_FOUND,
)
from ..shared.contracts import EntityReference, ResourceType, WireModel
from ..shared.paging import PagedResult, Paging, ensure_paging

logger = logging.getLogger("ddcompute")


class NetworkDomain(WireModel):
    """A network domain."""

    id: str
    name: str = ""
    description: str = ""
    type: str = ""
    nat_ipv4_address: Optional[str] = Field(default=None, alias="snatIpv4Address")
    create_time: Optional[str] = Field(default=None, alias="createTime")
    state: Optional[str] = None
    datacenter_id: Optional[str] = Field(default=None, alias="datacenterId")

    resource_type: ClassVar[ResourceType] = ResourceType.NETWORK_DOMAIN

    def to_entity_reference(self) -> EntityReference:
        return EntityReference(id=self.id, name=self.name)


class NetworkDomains(PagedResult):
    """A page of network domains."""

    domains: list[NetworkDomain] = Field(default_factory=list, alias="networkDomain")


class DeployNetworkDomain(WireModel):
    datacenter_id: str = Field(alias="datacenterId")
    name: str
    description: str = ""
    type: str


class DeleteNetworkDomain(WireModel):
    id: str


class NetworkDomainOperations(BaseComputeClient):
    """Network domain operations."""

    def list_network_domains(self, paging: Optional[Paging] = None) -> NetworkDomains:
        """List the network domains visible to the current organization.

        Args:
            paging: Page to retrieve (defaults to the first page)

        Returns:
            A page of network domains, in the order returned by the API
        """
        organization_id = self.get_organization_id()

        query = urlencode(ensure_paging(paging).to_query_parameters())
        request_uri = f"{API_NETWORK_DOMAIN_LIST.format(org_id=organization_id)}?{query}"
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            raise api_response.to_error("Request to list network domains", status_code)

        return decode_json_entity(NetworkDomains, response_body, status_code)

    def get_network_domain(self, id: str) -> Optional[NetworkDomain]:
        """Retrieve a network domain by Id.

        Returns:
            The network domain, or None if no network domain exists with that Id
        """
        organization_id = self.get_organization_id()

        request_uri = API_NETWORK_DOMAIN_GET.format(org_id=organization_id, id=id)
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            if api_response.response_code == RESPONSE_CODE_RESOURCE_NOT_FOUND:
                return None

            raise api_response.to_error(f"Request to retrieve network domain '{id}'", status_code)

        return decode_json_entity(NetworkDomain, response_body, status_code)

    def deploy_network_domain(
        self,
        datacenter_id: str,
        name: str,
        description: str = "",
        plan: str = "ESSENTIALS",
    ) -> str:
        """Deploy a new network domain.

        Deployment is asynchronous on the server; poll ``get_network_domain``
        for the domain's state.

        Returns:
            Id of the new network domain
        """
        organization_id = self.get_organization_id()

        request_uri = API_NETWORK_DOMAIN_DEPLOY.format(org_id=organization_id)
        response_body, status_code = self._invoke(
            ApiVersion.V22,
            request_uri,
            "POST",
            DeployNetworkDomain(datacenter_id=datacenter_id, name=name, description=description, type=plan),
        )

        api_response = read_api_response_v2(response_body, status_code)
        if api_response.response_code != RESPONSE_CODE_IN_PROGRESS:
            raise api_response.to_error(
                f"Request to deploy network domain '{name}' in data centre '{datacenter_id}'",
                status_code,
            )

        network_domain_id = api_response.get_field_message(FIELD_NETWORK_DOMAIN_ID)
        if network_domain_id is None:
            raise api_response.to_missing_field_error(FIELD_NETWORK_DOMAIN_ID, status_code)

        logger.info(f"Deploying network domain '{name}' ({network_domain_id}) in '{datacenter_id}'")
        return network_domain_id

    def delete_network_domain(self, id: str) -> None:
        """Delete a network domain.

        Deletion is asynchronous on the server.
        """
        organization_id = self.get_organization_id()

        request_uri = API_NETWORK_DOMAIN_DELETE.format(org_id=organization_id)
        response_body, status_code = self._invoke(
            ApiVersion.V22, request_uri, "POST", DeleteNetworkDomain(id=id)
        )

        api_response = read_api_response_v2(response_body, status_code)
        if api_response.response_code != RESPONSE_CODE_IN_PROGRESS:
            raise api_response.to_error(f"Request to delete network domain '{id}'", status_code)
