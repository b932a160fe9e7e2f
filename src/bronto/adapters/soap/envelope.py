"""SOAP 1.1 envelope encoding and decoding.

Request keys are written in snake_case and rendered as lowerCamelCase element names;
response element names come back as snake_case keys. Repeated sibling elements decode
to a list, a single element decodes to a plain value, so callers that expect a
collection must normalize.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from .errors import UnexpectedResponseError, fault_from_response

if TYPE_CHECKING:
    from bronto._types import Payload

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camelize(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def snakify(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _format_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime | date):
        return value.isoformat()
    return str(value)


def _append(parent: ET.Element, tag: str, value: object) -> None:
    if value is None:
        return
    if isinstance(value, list | tuple):
        for item in value:
            _append(parent, tag, item)
        return
    element = ET.SubElement(parent, tag)
    if isinstance(value, Mapping):
        for key, child in value.items():
            _append(element, camelize(str(key)), child)
    else:
        element.text = _format_scalar(value)


def _append_qualified(parent: ET.Element, namespace: str, payload: Payload) -> None:
    for key, value in payload.items():
        _append(parent, f"{{{namespace}}}{camelize(key)}", value)


def build_envelope(
    procedure: str,
    body: Payload | None,
    *,
    namespace: str,
    header: Payload | None = None,
) -> bytes:
    """Render a request envelope for ``procedure`` (e.g. ``read_fields``)."""

    ET.register_namespace("soapenv", SOAP_ENV_NS)
    ET.register_namespace("v4", namespace)

    envelope = ET.Element(f"{{{SOAP_ENV_NS}}}Envelope")
    header_element = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Header")
    if header:
        _append_qualified(header_element, namespace, header)

    body_element = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    operation = ET.SubElement(body_element, f"{{{namespace}}}{camelize(procedure)}")
    for key, value in (body or {}).items():
        _append(operation, camelize(key), value)

    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)


def _element_value(element: ET.Element) -> object:
    if element.get(f"{{{XSI_NS}}}nil") == "true":
        return None
    children = list(element)
    if not children:
        text = element.text.strip() if element.text else ""
        return text or None

    result: dict[str, object] = {}
    for child in children:
        key = snakify(_local_name(child.tag))
        value = _element_value(child)
        if key not in result:
            result[key] = value
            continue
        existing = result[key]
        if isinstance(existing, list):
            existing.append(value)
        else:
            result[key] = [existing, value]
    return result


def parse_envelope(content: bytes) -> dict[str, object]:
    """Decode a response envelope into ``{"<procedure>_response": ...}``.

    Raises the matching ``SoapFault`` subclass when the body carries a fault.
    """

    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise UnexpectedResponseError(f"Malformed SOAP response: {exc}") from exc

    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    if body is None:
        raise UnexpectedResponseError("SOAP response has no Body element")

    children = list(body)
    if not children:
        raise UnexpectedResponseError("SOAP response Body is empty")

    first = children[0]
    if _local_name(first.tag) == "Fault":
        fault_string = first.findtext("faultstring") or "Unknown SOAP fault"
        fault_code = first.findtext("faultcode")
        raise fault_from_response(fault_string.strip(), fault_code)

    return {snakify(_local_name(first.tag)): _element_value(first)}
