# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""SOAP transport for the ABR XML search web service."""

import logging
import re
import urllib.error
import urllib.request
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Any, Protocol

from lxml import etree  # type: ignore

from abn_search.errors import RemoteError, TransportError

logger = logging.getLogger("abn_search")

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
ABR_NS = "http://abr.business.gov.au/ABRXMLSearch/"
_XSI_NIL = "{http://www.w3.org/2001/XMLSchema-instance}nil"

_RE_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z])")
_RE_CAMEL = re.compile(r"([a-z\d])([A-Z])")


class RegistryTransport(Protocol):
    """Anything that can run one registry operation and return its body."""

    def call(self, operation: str, message: dict[str, Any]) -> dict[str, Any]: ...


def _get_user_agent() -> str:
    try:
        pkg_version = get_version("abn-search")
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
    return f"abn-search/{pkg_version} (+https://abr.business.gov.au/abrxmlsearch/)"


def snake_case(name: str) -> str:
    """``SearchByABNv201408Response`` -> ``search_by_ab_nv201408_response``."""
    name = _RE_ACRONYM.sub(r"\1_\2", name)
    name = _RE_CAMEL.sub(r"\1_\2", name)
    return name.lower()


def build_envelope(operation: str, message: dict[str, Any]) -> bytes:
    """Serialize a SOAP 1.1 request. Nested dicts become nested elements, None is omitted."""
    envelope = etree.Element(f"{{{SOAP_ENV_NS}}}Envelope", nsmap={"soap": SOAP_ENV_NS})
    body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    op = etree.SubElement(body, f"{{{ABR_NS}}}{operation}", nsmap={None: ABR_NS})
    _append_message(op, message)
    return etree.tostring(envelope, xml_declaration=True, encoding="utf-8")


def _append_message(parent: Any, message: dict[str, Any]) -> None:
    for key, value in message.items():
        if value is None:
            continue
        child = etree.SubElement(parent, f"{{{ABR_NS}}}{key}")
        if isinstance(value, dict):
            _append_message(child, value)
        else:
            child.text = str(value)


def element_to_value(element: Any) -> Any:
    """Convert an XML element into nested dicts keyed by snake_case names.

    Repeated child elements become lists. Empty and xsi:nil leaves become None.
    """
    children = [c for c in element if isinstance(c.tag, str)]
    if not children:
        if element.get(_XSI_NIL) == "true":
            return None
        text = (element.text or "").strip()
        return text or None

    out: dict[str, Any] = {}
    for child in children:
        key = snake_case(etree.QName(child).localname)
        value = element_to_value(child)
        if key not in out:
            out[key] = value
        elif isinstance(out[key], list):
            out[key].append(value)
        else:
            out[key] = [out[key], value]
    return out


def parse_envelope(raw: bytes) -> dict[str, Any]:
    """Parse a SOAP reply into ``{<operation>_response: {...}}``.

    Raises:
        RemoteError: on a SOAP fault.
        TransportError: if the reply is not a SOAP envelope.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(raw, parser)
    except etree.XMLSyntaxError as exc:
        raise TransportError(f"Unreadable registry reply: {exc}") from exc

    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    if body is None:
        raise TransportError("Registry reply has no SOAP Body")

    fault = body.find(f"{{{SOAP_ENV_NS}}}Fault")
    if fault is not None:
        raise RemoteError(fault.findtext("faultstring"))

    out: dict[str, Any] = {}
    for child in body:
        if isinstance(child.tag, str):
            out[snake_case(etree.QName(child).localname)] = element_to_value(child)
    return out


class SoapTransport:
    """Posts one SOAP request per call. No retries."""

    def __init__(
        self, endpoint: str, proxy: str | None = None, timeout: float = 30.0
    ) -> None:
        self.endpoint = endpoint
        self.proxy = proxy
        self.timeout = timeout

    def _opener(self) -> urllib.request.OpenerDirector:
        if self.proxy:
            handler = urllib.request.ProxyHandler({"http": self.proxy, "https": self.proxy})
            return urllib.request.build_opener(handler)
        return urllib.request.build_opener()

    def call(self, operation: str, message: dict[str, Any]) -> dict[str, Any]:
        data = build_envelope(operation, message)
        logger.debug("POST %s (%s, %d bytes)", self.endpoint, operation, len(data))
        status = None
        try:
            req = urllib.request.Request(
                self.endpoint,
                data=data,
                headers={
                    "Content-Type": "text/xml; charset=utf-8",
                    "SOAPAction": f'"{ABR_NS}{operation}"',
                    "User-Agent": _get_user_agent(),
                },
            )
            with self._opener().open(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            # SOAP faults arrive as HTTP 500 with a fault envelope
            with exc:
                raw = exc.read()
            status = exc.code
            if not raw:
                raise TransportError(f"{operation} failed: HTTP {status}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise TransportError(f"{operation} failed: {exc}") from exc
        logger.debug("Received %d bytes", len(raw))
        if status is None:
            return parse_envelope(raw)
        try:
            return parse_envelope(raw)
        except TransportError as exc:
            raise TransportError(f"{operation} failed: HTTP {status}: {exc}") from exc
