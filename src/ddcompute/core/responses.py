"""
ddcompute - Response Envelopes

This module decodes compute API response bodies into normalized envelopes.

Both API generations return a status envelope for operations that do not
return an entity (and for errors):

- Legacy (v1, XML): ``<Status>`` with ``operation``, ``result``, ``resultDetail``,
  ``resultCode`` and zero or more ``additionalInformation`` name/value entries.
- Current (v2.2, JSON): ``operation``, ``responseCode``, ``message``, ``info``
  (field messages), ``warning``, ``error`` and ``requestId``.

Decoded envelopes never carry an empty response code or message; missing values
are replaced with fixed sentinels.
"""

import xml.etree.ElementTree as ElementTree
from typing import ClassVar, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..shared.constants import (
    RESPONSE_CODE_OK,
    RESPONSE_CODE_UNKNOWN,
    RESULT_SUCCESS,
    RESULT_UNKNOWN,
    UNEXPECTED_RESPONSE_MESSAGE,
)
from ..shared.contracts import WireModel
from .exceptions import APIError, ResponseDecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


class FieldMessage(WireModel):
    """A name/value pair carrying out-of-band data (e.g. a new resource's Id)."""

    field_name: str = Field(alias="name")
    message: str = Field(default="", alias="value")


class APIResponse(WireModel):
    """Normalized envelope shared by both API generations."""

    operation: Optional[str] = None
    response_code: Optional[str] = None
    message: Optional[str] = None
    field_messages: list[FieldMessage] = Field(default_factory=list)

    success_code: ClassVar[str] = RESPONSE_CODE_OK

    def is_success(self) -> bool:
        return self.response_code == self.success_code

    def get_field_message(self, field_name: str) -> Optional[str]:
        """Get the value of the named field message, if present."""
        for field_message in self.field_messages:
            if field_message.field_name == field_name:
                return field_message.message
        return None

    def to_error(self, operation: str, status_code: int) -> APIError:
        """Create an error describing a failed operation.

        Args:
            operation: Description of the operation (e.g. "Request to delete NAT rule 'x'")
            status_code: HTTP status code of the response

        Returns:
            APIError carrying the envelope's response code and message
        """
        return APIError(
            f"{operation} failed with status code {status_code} "
            f"({self.response_code}): {self.message}",
            status_code=status_code,
            response_code=self.response_code,
            api_message=self.message,
        )

    def to_missing_field_error(self, field_name: str, status_code: int) -> APIError:
        """Create an error for a success response that lacks an expected field message."""
        return APIError(
            f"Received an unexpected response (missing '{field_name}') with status code "
            f"{status_code} ({self.response_code}): {self.message}",
            status_code=status_code,
            response_code=self.response_code,
            api_message=self.message,
        )


class APIResponseV1(APIResponse):
    """Legacy (XML) status envelope. ``response_code`` holds the ``result`` element."""

    result_code: Optional[str] = None

    success_code: ClassVar[str] = RESULT_SUCCESS

    @property
    def result(self) -> Optional[str]:
        return self.response_code

    @classmethod
    def from_xml_element(cls, element: ElementTree.Element) -> "APIResponseV1":
        field_messages = [
            FieldMessage(
                field_name=info.get("name", ""),
                message=child_text(info, "value"),
            )
            for info in iter_children(element, "additionalInformation")
        ]
        return cls(
            operation=child_text(element, "operation") or None,
            response_code=child_text(element, "result") or None,
            message=child_text(element, "resultDetail") or None,
            result_code=child_text(element, "resultCode") or None,
            field_messages=field_messages,
        )


class APIResponseV2(APIResponse):
    """Current (JSON) response envelope."""

    response_code: Optional[str] = Field(default=None, alias="responseCode")
    field_messages: list[FieldMessage] = Field(default_factory=list, alias="info")
    warnings: list[FieldMessage] = Field(default_factory=list, alias="warning")
    errors: list[FieldMessage] = Field(default_factory=list, alias="error")
    request_id: Optional[str] = Field(default=None, alias="requestId")


# ========== XML helpers ==========

def local_name(tag: str) -> str:
    """Strip the namespace (if any) from an element tag."""
    return tag.rsplit("}", 1)[-1]


def iter_children(element: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    """Iterate direct children with the given local name, ignoring namespaces."""
    for child in element:
        if local_name(child.tag) == name:
            yield child


def find_child(element: ElementTree.Element, name: str) -> Optional[ElementTree.Element]:
    return next(iter_children(element, name), None)


def child_text(element: ElementTree.Element, name: str, default: str = "") -> str:
    child = find_child(element, name)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def parse_xml(response_body: bytes, status_code: int) -> ElementTree.Element:
    """Parse an XML response body.

    Raises:
        ResponseDecodeError: If the body is not well-formed XML
    """
    try:
        return ElementTree.fromstring(response_body.strip())
    except ElementTree.ParseError as e:
        raise ResponseDecodeError(
            f"Error reading API response (v1) from XML: {e}",
            context={"status_code": status_code},
        ) from e


# ========== Decoders ==========

def read_api_response_v1(response_body: bytes, status_code: int) -> APIResponseV1:
    """Read a legacy status envelope (XML) from a response body.

    Raises:
        ResponseDecodeError: If the body is not well-formed XML
    """
    api_response = APIResponseV1.from_xml_element(parse_xml(response_body, status_code))

    if not api_response.response_code:
        api_response.response_code = RESULT_UNKNOWN

    if not api_response.message:
        api_response.message = UNEXPECTED_RESPONSE_MESSAGE

    return api_response


def read_api_response_v2(response_body: bytes, status_code: int) -> APIResponseV2:
    """Read a current-protocol envelope (JSON) from a response body.

    Raises:
        ResponseDecodeError: If the body is not a JSON envelope
    """
    try:
        api_response = APIResponseV2.model_validate_json(response_body)
    except PydanticValidationError as e:
        raise ResponseDecodeError(
            f"Error reading API response (v2) from JSON: {e}",
            context={"status_code": status_code},
        ) from e

    if not api_response.response_code:
        api_response.response_code = RESPONSE_CODE_UNKNOWN

    if not api_response.message:
        api_response.message = UNEXPECTED_RESPONSE_MESSAGE

    return api_response


def decode_json_entity(model: Type[ModelT], response_body: bytes, status_code: int = 200) -> ModelT:
    """Decode a JSON entity (or page of entities) from a response body.

    Raises:
        ResponseDecodeError: If the body does not match the entity's shape
    """
    try:
        return model.model_validate_json(response_body)
    except PydanticValidationError as e:
        raise ResponseDecodeError(
            f"Error reading {model.__name__} from JSON: {e}",
            context={"status_code": status_code},
        ) from e
