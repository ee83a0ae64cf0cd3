"""
Pytest configuration for ePOS-Print tests.

Provides a recording transport and canned printer replies.
"""

import pytest

from eposprint import EposPrinter, TransportReply

PRINTER_URL = "http://192.168.1.194"


def make_reply(success: bool = True, code: str = "", status: int = 251658262,
               battery: int = 0) -> bytes:
    """Build a reply envelope as the printer sends it."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
        "<s:Body>"
        f'<response success="{"true" if success else "false"}" code="{code}" '
        f'status="{status}" battery="{battery}" '
        'xmlns="http://www.epson-pos.com/schemas/2011/03/epos-print"/>'
        "</s:Body>"
        "</s:Envelope>"
    ).encode("utf-8")


class RecordingTransport:
    """Synchronous transport that records every request."""

    def __init__(self, reply: TransportReply):
        self.reply = reply
        self.calls = []

    def send(self, url, body, headers, params):
        self.calls.append({"url": url, "body": body, "headers": dict(headers), "params": dict(params)})
        return self.reply


@pytest.fixture
def ok_transport():
    """Transport whose printer reports success."""
    return RecordingTransport(TransportReply(status=200, body=make_reply()))


@pytest.fixture
def printer(ok_transport):
    """Printer wired to the recording transport."""
    return EposPrinter(PRINTER_URL, device_id="local_printer", timeout=10000, transport=ok_transport)
