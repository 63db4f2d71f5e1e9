"""
Minimal SOAP 1.1 transport shared by the SOAP carriers.

Envelopes are built from plain dicts (or the dataclass request records in
`serializers.carrier_serializer`), posted with `requests` and parsed with
ElementTree. A fault, an HTTP error or an unreadable body raises
`CarrierTransportError`; drivers convert that into a 503 result.
"""
import logging as log
from dataclasses import asdict, is_dataclass
from typing import Any, Optional
from xml.etree import ElementTree as ET

import requests

from config.app_vars import CARRIER_TIMEOUT
from utils.exceptions import CarrierTransportError, SoapFault

SOAP_ENV = "http://schemas.xmlsoap.org/soap/envelope/"

ET.register_namespace("soap", SOAP_ENV)


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _append(parent: ET.Element, value: Any, namespace: Optional[str]) -> None:
    if is_dataclass(value):
        value = asdict(value)

    if isinstance(value, dict):
        for key, child in value.items():
            if child is None:
                continue
            tag = f"{{{namespace}}}{key}" if namespace else key
            items = child if isinstance(child, list) else [child]
            for item in items:
                _append(ET.SubElement(parent, tag), item, namespace)
    else:
        parent.text = _format(value)


def build_envelope(
    operation: str,
    namespace: str,
    params: Any,
    qualified: bool = True,
) -> bytes:
    """Serialize `params` as the body of `operation`.

    Lists become repeated elements with the key's name. With `qualified`
    unset the child elements carry no namespace, as JAX-WS services expect.
    """
    envelope = ET.Element(f"{{{SOAP_ENV}}}Envelope")
    body = ET.SubElement(envelope, f"{{{SOAP_ENV}}}Body")
    op = ET.SubElement(body, f"{{{namespace}}}{operation}")
    _append(op, params, namespace if qualified else None)
    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)


def call(
    endpoint: str,
    operation: str,
    namespace: str,
    params: Any,
    soap_action: str = "",
    timeout: float = CARRIER_TIMEOUT,
    verify: bool = True,
    qualified: bool = True,
) -> ET.Element:
    """Invoke one SOAP operation and return the response Body element."""
    payload = build_envelope(operation, namespace, params, qualified=qualified)
    headers = {
        "Content-Type": "text/xml; charset=utf-8",
        "SOAPAction": f'"{soap_action}"',
    }

    log.debug(f"SOAP {operation} -> {endpoint}")
    try:
        response = requests.post(
            url=endpoint,
            data=payload,
            headers=headers,
            timeout=timeout,
            verify=verify,
        )
    except requests.Timeout as e:
        raise CarrierTransportError(f"{operation} timed out after {timeout}s") from e
    except requests.RequestException as e:
        raise CarrierTransportError(f"{operation} failed: {str(e)}") from e

    try:
        root = ET.fromstring(response.content)
    except ET.ParseError as e:
        raise CarrierTransportError(
            f"{operation} returned a malformed response (HTTP {response.status_code})"
        ) from e

    body = root.find("{*}Body")
    if body is None:
        raise CarrierTransportError(f"{operation} response has no SOAP body")

    fault = body.find("{*}Fault")
    if fault is not None:
        raise SoapFault(find_text(fault, "faultcode"), find_text(fault, "faultstring"))

    if response.status_code >= 400:
        raise CarrierTransportError(f"{operation} returned HTTP {response.status_code}")

    return body


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def find(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    """First descendant with the given local name, in any namespace."""
    if element is None:
        return None
    return element.find(f".//{{*}}{name}")


def find_text(element: Optional[ET.Element], name: str, default: str = "") -> str:
    found = find(element, name)
    if found is None or found.text is None:
        return default
    return found.text.strip()


def child_text(element: Optional[ET.Element], name: str, default: str = "") -> str:
    """Text of a direct child, ignoring same-named elements deeper down."""
    if element is None:
        return default
    found = element.find(f"{{*}}{name}")
    if found is None or found.text is None:
        return default
    return found.text.strip()


def parse_embedded_xml(text: Optional[str]) -> Optional[ET.Element]:
    """Parse an XML document carried as a string inside a SOAP field."""
    if not text or not text.strip():
        return None
    try:
        return ET.fromstring(text.strip())
    except ET.ParseError as e:
        log.warning(f"Could not parse embedded XML: {str(e)}")
        return None


def service_endpoint(wsdl: str) -> str:
    """The service address for a WSDL URL (the URL without `?wsdl`)."""
    base, _, query = wsdl.partition("?")
    return base if query.lower() == "wsdl" else wsdl
