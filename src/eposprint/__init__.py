"""ePOS-Print XML client for Epson network receipt and label printers."""

__version__ = "0.1.0"

from .barcodes import (
    HRI,
    BarcodeType,
    ErrorCorrectionInt,
    ErrorCorrectionLevel,
    SymbolType,
    parse_level,
)
from .catalog import (
    Align,
    Color,
    CutType,
    FeedPos,
    Font,
    Lang,
    LineStyle,
    OtherLang,
    PrintDirection,
    parse_lang,
)
from .codec import parse, render
from .commands import (
    Area,
    Barcode,
    Command,
    Cut,
    Direction,
    Feed,
    Hline,
    Image,
    Line,
    Mode,
    Position,
    Rectangle,
    Symbol,
    Text,
)
from .config import PrinterSettings, clear_settings, load_settings, save_settings
from .document import Document
from .envelope import build_request, parse_response
from .errors import (
    CommandError,
    DocumentSpent,
    EposError,
    IllegalForMode,
    InvalidPayload,
    ResponseError,
    SerializeError,
    TransportError,
    UnknownCatalogValue,
)
from .printer import EposPrinter
from .responses import Response
from .status import STATUS_FLAGS, StatusFlag, decode_status, status_summary
from .transport import RequestsTransport, Transport, TransportReply

__all__ = [
    "EposPrinter",
    "Document",
    "Mode",
    "Command",
    "Text",
    "Feed",
    "Image",
    "Barcode",
    "Symbol",
    "Cut",
    "Hline",
    "Area",
    "Rectangle",
    "Line",
    "Direction",
    "Position",
    "Align",
    "Color",
    "CutType",
    "FeedPos",
    "Font",
    "Lang",
    "OtherLang",
    "LineStyle",
    "PrintDirection",
    "BarcodeType",
    "SymbolType",
    "HRI",
    "ErrorCorrectionLevel",
    "ErrorCorrectionInt",
    "parse_lang",
    "parse_level",
    "render",
    "parse",
    "build_request",
    "parse_response",
    "Response",
    "StatusFlag",
    "STATUS_FLAGS",
    "decode_status",
    "status_summary",
    "Transport",
    "TransportReply",
    "RequestsTransport",
    "PrinterSettings",
    "load_settings",
    "save_settings",
    "clear_settings",
    "EposError",
    "CommandError",
    "IllegalForMode",
    "InvalidPayload",
    "DocumentSpent",
    "SerializeError",
    "UnknownCatalogValue",
    "TransportError",
    "ResponseError",
]
