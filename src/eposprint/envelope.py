"""
SOAP Envelope for ePOS-Print Requests and Replies.

Request layout:

    <s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
      <s:Body>
        <epos-print xmlns="http://www.epson-pos.com/schemas/2011/03/epos-print">
          [<page>] commands [</page>]
        </epos-print>
      </s:Body>
    </s:Envelope>

The commands are already rendered XML, and the envelope serializer treats
them as plain text, so they come out escaped a second time. build_request
applies one unescape pass to the finished document to undo that. This is
the only place the pass happens: raw command text is escaped once by the
codec, once more by the envelope serializer, and unescaped once here
before transmission.
"""

from typing import Iterable
import xml.etree.ElementTree as ET
from xml.sax.saxutils import unescape

from .commands import Mode
from .errors import SerializeError
from .responses import Response

SOAP_NS = "http://schemas.xmlsoap.org/soap/envelope/"
EPOS_NS = "http://www.epson-pos.com/schemas/2011/03/epos-print"


def build_envelope(fragments: Iterable[str], mode: Mode) -> ET.Element:
    """Wrap rendered commands in the print payload and SOAP envelope."""
    body_text = "".join(fragments)

    envelope = ET.Element("s:Envelope", {"xmlns:s": SOAP_NS})
    soap_body = ET.SubElement(envelope, "s:Body")
    epos_print = ET.SubElement(soap_body, "epos-print", {"xmlns": EPOS_NS})

    if Mode(mode) == Mode.PAGE:
        page = ET.SubElement(epos_print, "page")
        page.text = body_text
    else:
        epos_print.text = body_text

    return envelope


def build_request(fragments: Iterable[str], mode: Mode) -> bytes:
    """
    Serialize a complete print request.

    Args:
        fragments: Rendered commands in print order
        mode: Document mode; Page mode adds the <page> wrapper

    Returns:
        UTF-8 request body ready to POST
    """
    serialized = ET.tostring(build_envelope(fragments, mode), encoding="unicode")
    return unescape(serialized).encode("utf-8")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_response(data: bytes) -> Response:
    """
    Extract the response element from a reply envelope.

    Raises:
        SerializeError: If the reply is not XML or has no response element
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise SerializeError(f"Malformed reply XML: {e}") from e

    if _local_name(root.tag) != "Envelope":
        raise SerializeError(f"Unexpected reply root element: {root.tag}")

    for element in root.iter():
        if _local_name(element.tag) == "response":
            return Response.from_element(element)

    raise SerializeError("Reply has no response element")
