"""
ddcompute - Request Builder

This module builds authenticated, protocol-versioned requests for the compute API.

The legacy protocol (v1) always serializes request bodies as XML and the current
protocol (v2.2) always as JSON. No network I/O happens here.
"""

import base64
import json
import xml.etree.ElementTree as ElementTree
from typing import Any

import httpx
from pydantic import BaseModel

from .exceptions import SerializationError
from .models import ApiVersion


def serialize_json(body: Any) -> bytes:
    """Serialize a request body as JSON.

    Args:
        body: Pydantic model, or any value accepted by ``json.dumps``

    Returns:
        UTF-8 encoded JSON

    Raises:
        SerializationError: If the value cannot be represented as JSON
    """
    try:
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Unable to serialize request body as JSON: {e}",
            context={"body_type": type(body).__name__},
        ) from e


def serialize_xml(body: Any) -> bytes:
    """Serialize a request body as XML.

    Args:
        body: An ``Element``, or an object exposing ``to_xml_element()``

    Returns:
        UTF-8 encoded XML document

    Raises:
        SerializationError: If the value cannot be represented as XML
    """
    element = body
    if not isinstance(element, ElementTree.Element):
        to_xml_element = getattr(body, "to_xml_element", None)
        if not callable(to_xml_element):
            raise SerializationError(
                f"Unable to serialize request body of type '{type(body).__name__}' as XML",
                context={"body_type": type(body).__name__},
            )
        element = to_xml_element()

    try:
        return ElementTree.tostring(element, encoding="utf-8", xml_declaration=True)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Unable to serialize request body as XML: {e}",
            context={"body_type": type(body).__name__},
        ) from e


def _is_absent(body: Any) -> bool:
    return body is None or (isinstance(body, (bytes, str)) and len(body) == 0)


class RequestBuilder:
    """Builds requests for either compute API generation."""

    def __init__(self, base_address: str, username: str, password: str):
        """Initialize request builder.

        Args:
            base_address: Base address of the compute API (no trailing slash)
            username: Basic authentication username
            password: Basic authentication password
        """
        self.base_address = base_address.rstrip("/")

        auth_str = f"{username}:{password}"
        self.auth_header = base64.b64encode(auth_str.encode()).decode()

    def build_url(self, api_version: ApiVersion, relative_uri: str) -> str:
        """Compose the absolute URL for a request.

        Args:
            api_version: API generation (selects the path prefix)
            relative_uri: Path relative to the protocol prefix; a leading slash is ignored

        Returns:
            Absolute URL, e.g. ``https://api-au1.dimensiondata.com/caas/2.2/{org}/network/natRule``
        """
        return f"{self.base_address}/{api_version.prefix}/{relative_uri.lstrip('/')}"

    def build(
        self,
        api_version: ApiVersion,
        relative_uri: str,
        method: str,
        body: Any = None,
    ) -> httpx.Request:
        """Build an authenticated request.

        Args:
            api_version: API generation (selects prefix and wire format)
            relative_uri: Path (and optional query string) relative to the protocol prefix
            method: HTTP method
            body: Optional request body

        Returns:
            The request, ready to send

        Raises:
            SerializationError: If the body cannot be serialized
        """
        headers = {
            "Authorization": f"Basic {self.auth_header}",
            "Accept": api_version.content_type,
        }

        content = None
        if not _is_absent(body):
            if api_version is ApiVersion.V1:
                content = serialize_xml(body)
            else:
                content = serialize_json(body)
            headers["Content-Type"] = api_version.content_type

        return httpx.Request(
            method.upper(),
            self.build_url(api_version, relative_uri),
            headers=headers,
            content=content,
        )
