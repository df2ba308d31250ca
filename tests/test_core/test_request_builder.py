"""
Tests for ddcompute request construction.

This module tests URL composition, authentication and content negotiation
headers, and body serialization for both API generations.
"""

import base64
import json
import xml.etree.ElementTree as ElementTree
from typing import Optional

import pytest
from pydantic import BaseModel, ConfigDict, Field

from ddcompute.core.exceptions import SerializationError
from ddcompute.core.models import ApiVersion
from ddcompute.core.request_builder import RequestBuilder, serialize_json, serialize_xml

BASE_ADDRESS = "https://api-au1.example.test"


class SampleBody(BaseModel):
    network_domain_id: str = Field(alias="networkDomainId")
    external_ip: Optional[str] = Field(default=None, alias="externalIp")

    model_config = ConfigDict(populate_by_name=True)


class XmlBody:
    def to_xml_element(self):
        element = ElementTree.Element("DeleteServer")
        ElementTree.SubElement(element, "id").text = "server-1"
        return element


@pytest.fixture
def builder():
    return RequestBuilder(BASE_ADDRESS, "user1", "password")


class TestRequestBuilderUrls:
    """Test protocol prefixes and URL composition."""

    def test_legacy_prefix(self, builder):
        request = builder.build(ApiVersion.V1, "myaccount", "GET")

        assert str(request.url) == f"{BASE_ADDRESS}/oec/0.9/myaccount"

    def test_current_prefix(self, builder):
        request = builder.build(ApiVersion.V22, "org-1/network/networkDomain", "GET")

        assert str(request.url) == f"{BASE_ADDRESS}/caas/2.2/org-1/network/networkDomain"

    def test_leading_slash_is_ignored(self, builder):
        assert builder.build_url(ApiVersion.V22, "/org-1/image/osImage") == (
            f"{BASE_ADDRESS}/caas/2.2/org-1/image/osImage"
        )

    def test_trailing_slash_on_base_address_is_ignored(self):
        builder = RequestBuilder(BASE_ADDRESS + "/", "u", "p")

        assert builder.build_url(ApiVersion.V1, "myaccount") == f"{BASE_ADDRESS}/oec/0.9/myaccount"

    def test_query_string_preserved(self, builder):
        request = builder.build(ApiVersion.V22, "org-1/network/natRule?networkDomainId=nd-1", "GET")

        assert request.url.params["networkDomainId"] == "nd-1"

    def test_method_is_upper_cased(self, builder):
        request = builder.build(ApiVersion.V22, "org-1/network/networkDomain", "get")

        assert request.method == "GET"


class TestRequestBuilderHeaders:
    """Test authentication and content negotiation headers."""

    def test_basic_authentication(self, builder):
        request = builder.build(ApiVersion.V1, "myaccount", "GET")

        expected = base64.b64encode(b"user1:password").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.parametrize(
        "api_version,content_type",
        [(ApiVersion.V1, "text/xml"), (ApiVersion.V22, "application/json")],
    )
    def test_accept_header(self, builder, api_version, content_type):
        request = builder.build(api_version, "anything", "GET")

        assert request.headers["Accept"] == content_type

    def test_no_content_type_without_body(self, builder):
        request = builder.build(ApiVersion.V22, "anything", "GET")

        assert "Content-Type" not in request.headers
        assert request.content == b""

    @pytest.mark.parametrize("body", [b"", ""])
    def test_empty_body_treated_as_absent(self, builder, body):
        request = builder.build(ApiVersion.V22, "anything", "POST", body)

        assert "Content-Type" not in request.headers

    def test_json_body(self, builder):
        request = builder.build(
            ApiVersion.V22, "anything", "POST", SampleBody(network_domain_id="nd-1")
        )

        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"networkDomainId": "nd-1"}

    def test_xml_body(self, builder):
        request = builder.build(ApiVersion.V1, "server/deleteServer", "POST", XmlBody())

        assert request.headers["Content-Type"] == "text/xml"
        root = ElementTree.fromstring(request.content)
        assert root.tag == "DeleteServer"
        assert root.find("id").text == "server-1"

    def test_unserializable_body(self, builder):
        with pytest.raises(SerializationError):
            builder.build(ApiVersion.V22, "anything", "POST", {"value": object()})


class TestSerialization:
    """Test body serializers."""

    def test_json_omits_none_and_uses_aliases(self):
        body = SampleBody(network_domain_id="nd-1", external_ip=None)

        assert json.loads(serialize_json(body)) == {"networkDomainId": "nd-1"}

    def test_json_plain_value(self):
        assert json.loads(serialize_json({"id": "x"})) == {"id": "x"}

    def test_empty_dict_is_serialized(self):
        assert serialize_json({}) == b"{}"

    def test_xml_from_element(self):
        element = ElementTree.Element("Ping")

        data = serialize_xml(element)

        assert data.startswith(b"<?xml")
        assert b"<Ping />" in data

    def test_xml_rejects_plain_values(self):
        with pytest.raises(SerializationError) as exc_info:
            serialize_xml({"id": "x"})

        assert "dict" in str(exc_info.value)
