"""
ddcompute - NAT (Network Address Translation) Domain

NAT rules forward IPv4 traffic from a public IP address to a server's private
IPv4 address within a network domain.

The module supports:
- Retrieving a NAT rule by Id
- Listing NAT rules for a network domain with paging
- Creating and deleting NAT rules (both synchronous on the server)
"""

import logging
from typing import ClassVar, Optional
from urllib.parse import urlencode

from pydantic import Field

from ..core.client import BaseComputeClient
from ..core.models import ApiVersion
from ..core.responses import decode_json_entity, read_api_response_v2
from ..shared.constants import (
    API_NAT_RULE_CREATE,
    API_NAT_RULE_DELETE,
    API_NAT_RULE_GET,
    API_NAT_RULE_LIST,
    FIELD_NAT_RULE_ID,
    RESPONSE_CODE_OK,
    RESPONSE_CODE_RESOURCE_NOT_FOUND,
)
from ..shared.contracts import ResourceType, WireModel
from ..shared.paging import PagedResult, Paging, ensure_paging

logger = logging.getLogger("ddcompute")


class NATRule(WireModel):
    """A Network Address Translation (NAT) rule."""

    id: str
    network_domain_id: str = Field(default="", alias="networkDomainId")
    internal_ip_address: str = Field(default="", alias="internalIp")
    external_ip_address: str = Field(default="", alias="externalIp")
    create_time: Optional[str] = Field(default=None, alias="createTime")
    state: Optional[str] = None
    datacenter_id: Optional[str] = Field(default=None, alias="datacenterId")

    resource_type: ClassVar[ResourceType] = ResourceType.NAT_RULE


class NATRules(PagedResult):
    """A page of NAT rules."""

    rules: list[NATRule] = Field(default_factory=list, alias="natRule")


class CreateNATRule(WireModel):
    network_domain_id: str = Field(alias="networkDomainId")
    internal_ip_address: str = Field(alias="internalIp")
    external_ip_address: Optional[str] = Field(default=None, alias="externalIp")


class DeleteNATRule(WireModel):
    id: str


class NATOperations(BaseComputeClient):
    """NAT rule operations."""

    def get_nat_rule(self, id: str) -> Optional[NATRule]:
        """Retrieve a NAT rule by Id.

        Returns:
            The NAT rule, or None if no NAT rule exists with that Id
        """
        organization_id = self.get_organization_id()

        request_uri = API_NAT_RULE_GET.format(org_id=organization_id, id=id)
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            if api_response.response_code == RESPONSE_CODE_RESOURCE_NOT_FOUND:
                return None

            raise api_response.to_error(f"Request to retrieve NAT rule '{id}'", status_code)

        return decode_json_entity(NATRule, response_body, status_code)

    def list_nat_rules(self, network_domain_id: str, paging: Optional[Paging] = None) -> NATRules:
        """List the NAT rules defined in a network domain."""
        organization_id = self.get_organization_id()

        query = urlencode(
            {"networkDomainId": network_domain_id, **ensure_paging(paging).to_query_parameters()}
        )
        request_uri = f"{API_NAT_RULE_LIST.format(org_id=organization_id)}?{query}"
        response_body, status_code = self._invoke(ApiVersion.V22, request_uri, "GET")

        if status_code != 200:
            api_response = read_api_response_v2(response_body, status_code)
            raise api_response.to_error(
                f"Request to list NAT rules for network domain '{network_domain_id}'", status_code
            )

        return decode_json_entity(NATRules, response_body, status_code)

    def add_nat_rule(
        self,
        network_domain_id: str,
        internal_ip_address: str,
        external_ip_address: Optional[str] = None,
    ) -> str:
        """Create a NAT rule forwarding an external IPv4 address to an internal one.

        Args:
            network_domain_id: Network domain in which to create the rule
            internal_ip_address: Private IPv4 address to forward to
            external_ip_address: Public IPv4 address; if omitted, an unallocated
                address is used (if one is available)

        Returns:
            Id of the new NAT rule
        """
        organization_id = self.get_organization_id()

        request_uri = API_NAT_RULE_CREATE.format(org_id=organization_id)
        response_body, status_code = self._invoke(
            ApiVersion.V22,
            request_uri,
            "POST",
            CreateNATRule(
                network_domain_id=network_domain_id,
                internal_ip_address=internal_ip_address,
                external_ip_address=external_ip_address,
            ),
        )

        api_response = read_api_response_v2(response_body, status_code)
        if api_response.response_code != RESPONSE_CODE_OK:
            raise api_response.to_error(
                f"Request to create NAT rule in network domain '{network_domain_id}'", status_code
            )

        # Expected: "info": [{"name": "natRuleId", "value": "<id of the new NAT rule>"}]
        nat_rule_id = api_response.get_field_message(FIELD_NAT_RULE_ID)
        if nat_rule_id is None:
            raise api_response.to_missing_field_error(FIELD_NAT_RULE_ID, status_code)

        logger.info(f"Created NAT rule {nat_rule_id} in network domain '{network_domain_id}'")
        return nat_rule_id

    def delete_nat_rule(self, id: str) -> None:
        """Delete a NAT rule."""
        organization_id = self.get_organization_id()

        request_uri = API_NAT_RULE_DELETE.format(org_id=organization_id)
        response_body, status_code = self._invoke(
            ApiVersion.V22, request_uri, "POST", DeleteNATRule(id=id)
        )

        api_response = read_api_response_v2(response_body, status_code)
        if api_response.response_code != RESPONSE_CODE_OK:
            raise api_response.to_error(f"Request to delete NAT rule '{id}'", status_code)
