"""
High-Level ePOS-Print Printer Interface.

Builds documents for a network printer and sends each one as a single
ePOS-Print request.

Example:
    printer = EposPrinter("http://192.168.1.194")
    doc = printer.normal()
    doc.append(Text("Hello\\n", align=Align.CENTER))
    doc.append(Cut(CutType.FEED))
    response = await printer.print(doc)
"""

import inspect
import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

from .commands import Mode
from .config import DEFAULT_DEVICE_ID, DEFAULT_TIMEOUT_MS, PrinterSettings
from .document import Document
from .envelope import build_request, parse_response
from .errors import ResponseError, TransportError
from .responses import Response
from .transport import Transport, RequestsTransport

logger = logging.getLogger(__name__)

# Handler installed by EposPrinter.set_debug, shared by all printers
_debug_handler: Optional[logging.Handler] = None

ENDPOINT = "/cgi-bin/epos/service.cgi"

REQUEST_HEADERS = {
    "Content-Type": "text/xml; charset=utf-8",
    # Forces the printer to treat every request as uncached
    "If-Modified-Since": "Thu, 01 Jan 1970 00:00:00 GMT",
}


class EposPrinter:
    """
    Session with one ePOS-Print device.

    Each print() call sends exactly one request and never retries. The
    printer may not accept concurrent jobs; serializing calls is up to
    the caller.
    """

    def __init__(self, url: str, device_id: str = DEFAULT_DEVICE_ID,
                 timeout: int = DEFAULT_TIMEOUT_MS,
                 transport: Optional[Transport] = None):
        """
        Initialize printer interface.

        Args:
            url: Base URL of the printer (e.g. "http://192.168.1.194")
            device_id: ePOS device ID (default "local_printer")
            timeout: Printer-side processing timeout in milliseconds.
                This is not a network timeout.
            transport: Object performing the HTTP exchange
                (default RequestsTransport)
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Printer URL must be http(s)://host, got {url!r}")
        if timeout < 0:
            raise ValueError(f"Timeout must not be negative, got {timeout}")

        self.endpoint = urljoin(url, ENDPOINT)
        self.device_id = device_id
        self.timeout = timeout
        self.transport = transport if transport is not None else RequestsTransport()

    @classmethod
    def from_settings(cls, settings: PrinterSettings,
                      transport: Optional[Transport] = None) -> "EposPrinter":
        """Create a printer from saved settings."""
        return cls(settings.url, settings.device_id, settings.timeout, transport)

    def set_debug(self, enabled: bool):
        """
        Enable/disable debug output.

        Enabling attaches a stderr handler to the package logger, so debug
        records show up without any logging setup by the caller.
        """
        global _debug_handler
        package_logger = logging.getLogger("eposprint")
        if _debug_handler is not None:
            package_logger.removeHandler(_debug_handler)
            _debug_handler = None

        if enabled:
            _debug_handler = logging.StreamHandler()
            _debug_handler.setFormatter(logging.Formatter("%(message)s"))
            package_logger.addHandler(_debug_handler)
            package_logger.setLevel(logging.DEBUG)
        else:
            package_logger.setLevel(logging.NOTSET)

    def _log(self, message: str):
        logger.debug("[ePOS %s] %s", self.device_id, message)

    def normal(self) -> Document:
        """Start a new document in normal mode (commands print line by line)."""
        return Document(Mode.NORMAL)

    def page(self) -> Document:
        """Start a new document in page mode (commands placed in a print area)."""
        return Document(Mode.PAGE)

    @property
    def params(self) -> dict[str, str]:
        """Query parameters sent with every request."""
        return {"devid": self.device_id, "timeout": str(self.timeout)}

    async def print(self, document: Document) -> Response:
        """
        Send a document to the printer.

        The document is consumed; build a new one for the next job.

        Args:
            document: Document with the commands to print

        Returns:
            The printer's Response for a successful job

        Raises:
            DocumentSpent: If the document was already sent
            TransportError: If the HTTP exchange fails
            SerializeError: If the reply cannot be decoded
            ResponseError: If the printer reports a failed job
        """
        mode = document.mode
        fragments = document.take()
        body = build_request(fragments, mode)

        self._log(f"Sending {len(fragments)} commands ({mode.value} mode) to {self.endpoint}")
        logger.debug("Request XML: %s", body.decode("utf-8"))

        reply = self.transport.send(self.endpoint, body, REQUEST_HEADERS, self.params)
        if inspect.isawaitable(reply):
            reply = await reply

        if not 200 <= reply.status < 300:
            raise TransportError(f"Printer returned HTTP {reply.status}", status=reply.status)

        logger.debug("Raw reply: %r", reply.body)
        response = parse_response(reply.body)

        if not response.success:
            logger.warning("Print job failed: %s", response)
            raise ResponseError(response)

        self._log(f"Print job done: {response}")
        return response
