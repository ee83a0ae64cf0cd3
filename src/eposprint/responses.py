"""
Response Parser for ePOS-Print Replies.

The printer answers every print request with a SOAP envelope holding a
single response element:

    <response success="true" code="" status="251658262" battery="0"
              xmlns="http://www.epson-pos.com/schemas/2011/03/epos-print"/>
"""

from dataclasses import dataclass
from typing import Optional
import xml.etree.ElementTree as ET

from .errors import SerializeError
from .status import FLAG_NAMES, decode_status, status_summary


@dataclass
class Response:
    """
    Parsed ePOS-Print response.

    Attributes:
        ns: Namespace of the response element
        success: Whether the print job succeeded
        code: Vendor error code, meaningful only when success is False
        status: Raw 32-bit status word
        battery: Raw battery status word
    """

    ns: str = ""
    success: bool = False
    code: str = ""
    status: int = 0
    battery: int = 0

    @classmethod
    def from_element(cls, element: ET.Element) -> "Response":
        """Build a Response from a parsed response element."""
        ns = ""
        if element.tag.startswith("{"):
            ns = element.tag[1:].split("}", 1)[0]

        success_token = element.get("success")
        if success_token is None:
            raise SerializeError("Response is missing the success attribute")
        # Some firmware reports 1/0 instead of true/false
        if success_token in ("true", "1"):
            success = True
        elif success_token in ("false", "0"):
            success = False
        else:
            raise SerializeError(f"Invalid success value: {success_token!r}")

        return cls(
            ns=ns,
            success=success,
            code=element.get("code", ""),
            status=_parse_u32("status", element.get("status")),
            battery=_parse_u32("battery", element.get("battery")),
        )

    @property
    def flags(self) -> list[str]:
        """Names of the status flags set in the status word."""
        return decode_status(self.status)

    def has(self, name: str) -> bool:
        """Check a single status flag by name (e.g. "COVER_OPEN")."""
        if name not in FLAG_NAMES:
            raise KeyError(f"Unknown status flag: {name}")
        return name in self.flags

    def __str__(self) -> str:
        return f"status: '{self.code}' codes: {status_summary(self.status)}"


def _parse_u32(name: str, token: Optional[str]) -> int:
    if token is None or token == "":
        return 0
    try:
        value = int(token)
    except ValueError as e:
        raise SerializeError(f"Invalid {name} value: {token!r}") from e
    if not 0 <= value <= 0xFFFFFFFF:
        raise SerializeError(f"{name} out of 32-bit range: {value}")
    return value
