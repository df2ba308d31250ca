"""
ddcompute - Account Domain

The account associated with the client's credentials. Account details are only
available through the legacy (v1, XML) API; the account's organization Id scopes
almost every other operation.
"""

import xml.etree.ElementTree as ElementTree

from pydantic import BaseModel, Field

from ..core.client import BaseComputeClient
from ..core.models import ApiVersion
from ..core.responses import child_text, find_child, iter_children, parse_xml, read_api_response_v1
from ..shared.constants import API_V1_MY_ACCOUNT


class Role(BaseModel):
    """A role assigned to an account."""

    name: str


class Account(BaseModel):
    """Details of the account used to authenticate to the compute API."""

    user_name: str = ""
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    email_address: str = ""
    department: str = ""
    custom_defined_1: str = ""
    custom_defined_2: str = ""
    organization_id: str = ""
    assigned_roles: list[Role] = Field(default_factory=list)

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.assigned_roles]

    @classmethod
    def from_xml_element(cls, element: ElementTree.Element) -> "Account":
        roles = []
        roles_element = find_child(element, "roles")
        if roles_element is not None:
            roles = [
                Role(name=child_text(role, "name"))
                for role in iter_children(roles_element, "role")
            ]

        return cls(
            user_name=child_text(element, "userName"),
            full_name=child_text(element, "fullName"),
            first_name=child_text(element, "firstName"),
            last_name=child_text(element, "lastName"),
            email_address=child_text(element, "emailAddress"),
            department=child_text(element, "department"),
            custom_defined_1=child_text(element, "customDefined1"),
            custom_defined_2=child_text(element, "customDefined2"),
            organization_id=child_text(element, "orgId"),
            assigned_roles=roles,
        )


class AccountOperations(BaseComputeClient):
    """Account operations."""

    def _fetch_account(self) -> Account:
        response_body, status_code = self._invoke(ApiVersion.V1, API_V1_MY_ACCOUNT, "GET")

        if status_code != 200:
            api_response = read_api_response_v1(response_body, status_code)
            raise api_response.to_error("Request to retrieve account details", status_code)

        return Account.from_xml_element(parse_xml(response_body, status_code))
