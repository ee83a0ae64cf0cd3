"""Tests for EposPrinter dispatch and error handling."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from eposprint.catalog import Align, CutType
from eposprint.commands import Area, Cut, Feed, Rectangle, Text
from eposprint.config import PrinterSettings
from eposprint.errors import (
    DocumentSpent,
    EposError,
    IllegalForMode,
    ResponseError,
    SerializeError,
    TransportError,
)
from eposprint.printer import ENDPOINT, REQUEST_HEADERS, EposPrinter
from eposprint.responses import Response
from eposprint.transport import TransportReply

from conftest import PRINTER_URL, RecordingTransport, make_reply


class TestExceptionHierarchy:
    """Test exception class hierarchy."""

    def test_transport_error_is_epos_error(self):
        assert isinstance(TransportError("test"), EposError)

    def test_response_error_carries_response(self):
        """ResponseError exposes the decoded response."""
        response = Response(success=False, code="EPTR_COVER_OPEN", status=0x20)
        err = ResponseError(response)
        assert isinstance(err, EposError)
        assert err.response is response
        assert err.code == "EPTR_COVER_OPEN"
        assert err.status == 0x20
        assert err.flags == ["COVER_OPEN"]


class TestInit:
    """Test printer construction."""

    def test_endpoint_joined(self):
        printer = EposPrinter(PRINTER_URL, transport=MagicMock())
        assert printer.endpoint == "http://192.168.1.194/cgi-bin/epos/service.cgi"

    def test_endpoint_replaces_path(self):
        """The service path is absolute, like the printer expects."""
        printer = EposPrinter("https://printer.local:8043/some/path", transport=MagicMock())
        assert printer.endpoint == "https://printer.local:8043" + ENDPOINT

    def test_defaults(self):
        printer = EposPrinter(PRINTER_URL, transport=MagicMock())
        assert printer.params == {"devid": "local_printer", "timeout": "10000"}

    def test_rejects_bad_url(self):
        with pytest.raises(ValueError, match="URL"):
            EposPrinter("192.168.1.194")

    def test_rejects_negative_timeout(self):
        with pytest.raises(ValueError, match="Timeout"):
            EposPrinter(PRINTER_URL, timeout=-1)

    def test_from_settings(self):
        settings = PrinterSettings(url=PRINTER_URL, device_id="printer2", timeout=5000)
        printer = EposPrinter.from_settings(settings, transport=MagicMock())
        assert printer.params == {"devid": "printer2", "timeout": "5000"}

    def test_documents_start_fresh(self):
        """Each call returns a new, empty document."""
        printer = EposPrinter(PRINTER_URL, transport=MagicMock())
        first = printer.normal()
        first.append(Text("x"))
        assert len(printer.normal()) == 0
        assert printer.page().mode.value == "page"

    def test_set_debug(self):
        printer = EposPrinter(PRINTER_URL, transport=MagicMock())
        printer.set_debug(True)
        try:
            assert logging.getLogger("eposprint").level == logging.DEBUG
        finally:
            printer.set_debug(False)
        assert logging.getLogger("eposprint").level == logging.NOTSET

    def test_debug_output_emitted(self, capsys):
        """Debug messages reach stderr once debug is on, and stop when off."""
        printer = EposPrinter(PRINTER_URL, transport=MagicMock())
        printer.set_debug(True)
        try:
            printer._log("hello-debug")
        finally:
            printer.set_debug(False)
        assert "[ePOS local_printer] hello-debug" in capsys.readouterr().err

        printer._log("quiet")
        assert "quiet" not in capsys.readouterr().err

    def test_set_debug_twice_adds_one_handler(self):
        """Repeated enabling does not duplicate output."""
        printer = EposPrinter(PRINTER_URL, transport=MagicMock())
        package_logger = logging.getLogger("eposprint")
        before = len(package_logger.handlers)
        printer.set_debug(True)
        printer.set_debug(True)
        try:
            assert len(package_logger.handlers) == before + 1
        finally:
            printer.set_debug(False)
        assert len(package_logger.handlers) == before


class TestPrint:
    """Test a full print exchange."""

    @pytest.mark.asyncio
    async def test_success_returns_response(self, printer, ok_transport):
        """A successful reply is returned without raising."""
        doc = printer.normal()
        doc.append(Text("I HATE XML\n\n", double_width=True, double_height=True, align=Align.CENTER))
        doc.append(Feed(line=5))
        doc.append(Cut(CutType.FEED))

        response = await printer.print(doc)

        assert response.success is True
        assert response.status == 251658262
        assert "PRINT_SUCCESS" in response.flags

    @pytest.mark.asyncio
    async def test_exactly_one_request(self, printer, ok_transport):
        """One print job is one POST with the required headers and params."""
        doc = printer.normal()
        doc.append(Text("hi\n"))
        await printer.print(doc)

        assert len(ok_transport.calls) == 1
        call = ok_transport.calls[0]
        assert call["url"] == "http://192.168.1.194/cgi-bin/epos/service.cgi"
        assert call["params"] == {"devid": "local_printer", "timeout": "10000"}
        assert call["headers"]["Content-Type"] == "text/xml; charset=utf-8"
        assert call["headers"]["If-Modified-Since"] == "Thu, 01 Jan 1970 00:00:00 GMT"
        assert call["headers"] == REQUEST_HEADERS

    @pytest.mark.asyncio
    async def test_request_body(self, printer, ok_transport):
        """The body carries the rendered commands once, unescaped."""
        doc = printer.normal()
        doc.append(Text("{1 & done\n"))
        await printer.print(doc)

        body = ok_transport.calls[0]["body"].decode("utf-8")
        assert body.count("<text>{1 &amp; done\n</text>") == 1
        assert "&lt;text" not in body

    @pytest.mark.asyncio
    async def test_page_mode_body(self, printer, ok_transport):
        doc = printer.page()
        doc.append(Area(0, 0, 500, 500))
        doc.append(Rectangle(0, 0, 200, 100))
        await printer.print(doc)

        body = ok_transport.calls[0]["body"].decode("utf-8")
        assert '<page><area x="0" y="0" width="500" height="500"/>' in body

    @pytest.mark.asyncio
    async def test_document_is_consumed(self, printer, ok_transport):
        """A document cannot be sent twice."""
        doc = printer.normal()
        doc.append(Text("once\n"))
        await printer.print(doc)

        with pytest.raises(DocumentSpent):
            await printer.print(doc)
        assert len(ok_transport.calls) == 1

    @pytest.mark.asyncio
    async def test_failure_raises_response_error(self):
        """success=false surfaces ResponseError with code and status."""
        transport = RecordingTransport(
            TransportReply(200, make_reply(success=False, code="EPTR_COVER_OPEN", status=0x20))
        )
        printer = EposPrinter(PRINTER_URL, transport=transport)
        doc = printer.normal()
        doc.append(Text("x\n"))

        with pytest.raises(ResponseError) as exc_info:
            await printer.print(doc)

        assert exc_info.value.code == "EPTR_COVER_OPEN"
        assert exc_info.value.status == 0x20
        assert exc_info.value.response.has("COVER_OPEN")

    @pytest.mark.asyncio
    async def test_http_error_raises_transport_error(self):
        transport = RecordingTransport(TransportReply(500, b"Internal Server Error"))
        printer = EposPrinter(PRINTER_URL, transport=transport)

        with pytest.raises(TransportError) as exc_info:
            await printer.print(printer.normal())
        assert exc_info.value.status == 500

    @pytest.mark.asyncio
    async def test_malformed_reply(self):
        transport = RecordingTransport(TransportReply(200, b"not xml"))
        printer = EposPrinter(PRINTER_URL, transport=transport)

        with pytest.raises(SerializeError):
            await printer.print(printer.normal())

    @pytest.mark.asyncio
    async def test_async_transport(self):
        """Transports may return an awaitable."""
        transport = MagicMock()
        transport.send = AsyncMock(return_value=TransportReply(200, make_reply()))
        printer = EposPrinter(PRINTER_URL, transport=transport)

        response = await printer.print(printer.normal())

        assert response.success is True
        transport.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transport_exception_propagates(self):
        """Transport failures are surfaced, not retried."""
        transport = MagicMock()
        transport.send = AsyncMock(side_effect=TransportError("connection refused"))
        printer = EposPrinter(PRINTER_URL, transport=transport)

        with pytest.raises(TransportError, match="refused"):
            await printer.print(printer.normal())
        assert transport.send.await_count == 1

    @pytest.mark.asyncio
    async def test_illegal_command_fails_before_dispatch(self, printer, ok_transport):
        """Mode errors happen at append time, not at print time."""
        doc = printer.page()
        with pytest.raises(IllegalForMode):
            doc.append(Cut(CutType.FEED))
        assert ok_transport.calls == []
