"""
ePOS-Print Command Definitions.

Each print command is a frozen dataclass. Fields carry their wire
attribute name in the field metadata, in the order the printer documents
them. Optional attributes default to None and are left out of the XML,
which means "printer default" rather than zero.

Commands are only legal in some modes: Normal mode prints one command
after another, Page mode places commands inside a print area.
"""

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Optional

from .barcodes import (
    BarcodeType,
    GS1_EXPANDED_STACKED_MIN_SIZE,
    HRI,
    LevelValue,
    PDF417_MAX_SIZE,
    PDF417_TYPES,
    SymbolType,
    check_barcode_data,
    check_symbol_level,
    parse_level,
    symbol_width_range,
)
from .catalog import (
    Align,
    Color,
    CutType,
    FeedPos,
    Font,
    LangValue,
    LineStyle,
    PrintDirection,
    parse_lang,
)
from .errors import InvalidPayload, SerializeError


class Mode(str, Enum):
    """Document print mode."""
    NORMAL = "normal"
    PAGE = "page"


BOTH_MODES = frozenset({Mode.NORMAL, Mode.PAGE})
NORMAL_ONLY = frozenset({Mode.NORMAL})
PAGE_ONLY = frozenset({Mode.PAGE})

# Coordinates and dimensions are 16-bit dot counts
MAX_DOTS = 65535
MAX_FEED = 255


def parse_bool(token: str) -> bool:
    """Decode a wire boolean ("true"/"false" only)."""
    if token == "true":
        return True
    if token == "false":
        return False
    raise SerializeError(f"Invalid boolean token: {token!r}")


def attr(name: str, decode: Callable[[str], object], default=None, required: bool = False):
    """Declare a dataclass field rendered as an XML attribute."""
    metadata = {"attr": name, "decode": decode}
    if required:
        return field(metadata=metadata)
    return field(default=default, metadata=metadata)


def content():
    """Declare the dataclass field carried as element text."""
    return field(metadata={"content": True})


def _check_range(name: str, value: Optional[int], low: int, high: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPayload(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidPayload(f"{name} must be {low}-{high}, got {value}")


class Command:
    """Base class for all print commands."""

    TAG: ClassVar[str] = ""
    MODES: ClassVar[frozenset] = BOTH_MODES

    @property
    def kind(self) -> str:
        return type(self).__name__

    def allowed_in(self, mode: Mode) -> bool:
        return mode in self.MODES

    def validate(self, mode: Mode) -> None:
        """Check ranges and content. Raises InvalidPayload."""
        pass


# --- Commands valid in both modes ---


@dataclass(frozen=True)
class Text(Command):
    """
    Print a line of text.

    The printer may not print a lone text element unless it ends with
    a newline.
    """

    TAG: ClassVar[str] = "text"

    text: str = content()
    font: Optional[Font] = attr("font", Font.from_wire)
    smooth: Optional[bool] = attr("smooth", parse_bool)
    double_width: Optional[bool] = attr("dw", parse_bool)    # width wins when both set
    double_height: Optional[bool] = attr("dh", parse_bool)   # height wins when both set
    width: Optional[int] = attr("width", int)
    height: Optional[int] = attr("height", int)
    reverse: Optional[bool] = attr("reverse", parse_bool)
    underline: Optional[bool] = attr("ul", parse_bool)
    emphasis: Optional[bool] = attr("em", parse_bool)
    color: Optional[Color] = attr("color", Color.from_wire)
    lang: Optional[LangValue] = attr("lang", parse_lang)
    align: Optional[Align] = attr("align", Align.from_wire)

    def validate(self, mode: Mode) -> None:
        _check_range("Text width", self.width, 1, 8)
        _check_range("Text height", self.height, 1, 8)


@dataclass(frozen=True)
class Feed(Command):
    """Feed paper by dots, lines, or to a label position."""

    TAG: ClassVar[str] = "feed"

    unit: Optional[int] = attr("unit", int)        # dots
    line: Optional[int] = attr("line", int)        # lines
    linespc: Optional[int] = attr("linespc", int)  # dots per line
    pos: Optional[FeedPos] = attr("pos", FeedPos.from_wire)

    def validate(self, mode: Mode) -> None:
        if self.unit is None and self.line is None and self.linespc is None and self.pos is None:
            raise InvalidPayload("Feed needs at least one of unit, line, linespc or pos")
        _check_range("Feed unit", self.unit, 0, MAX_FEED)
        _check_range("Feed line", self.line, 0, MAX_FEED)
        _check_range("Feed linespc", self.linespc, 0, MAX_FEED)
        if self.pos is not None and mode == Mode.PAGE:
            raise InvalidPayload("Feed pos cannot be used in page mode")


@dataclass(frozen=True)
class Image(Command):
    """Print a raster image from a pre-encoded base64 payload."""

    TAG: ClassVar[str] = "image"

    data: str = content()
    width: int = attr("width", int, required=True)
    height: int = attr("height", int, required=True)
    align: Optional[Align] = attr("align", Align.from_wire)

    def validate(self, mode: Mode) -> None:
        _check_range("Image width", self.width, 1, MAX_DOTS)
        _check_range("Image height", self.height, 1, MAX_DOTS)
        if not self.data:
            raise InvalidPayload("Image data must not be empty")
        try:
            base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidPayload(f"Image data is not valid base64: {e}") from e


@dataclass(frozen=True)
class Barcode(Command):
    """Print a 1D barcode."""

    TAG: ClassVar[str] = "barcode"

    data: str = content()
    barcode_type: BarcodeType = attr("type", BarcodeType.from_wire, required=True)
    hri: Optional[HRI] = attr("hri", HRI.from_wire)
    font: Optional[Font] = attr("font", Font.from_wire)
    width: Optional[int] = attr("width", int)
    height: Optional[int] = attr("height", int)
    align: Optional[Align] = attr("align", Align.from_wire)
    rotate: Optional[bool] = attr("rotate", parse_bool)

    def validate(self, mode: Mode) -> None:
        _check_range("Barcode width", self.width, 2, 6)
        _check_range("Barcode height", self.height, 1, 255)
        check_barcode_data(self.barcode_type, self.data)


@dataclass(frozen=True)
class Symbol(Command):
    """Print a 2D symbol (PDF417, QR Code, MaxiCode, Aztec, ...)."""

    TAG: ClassVar[str] = "symbol"

    data: str = content()
    symbol_type: SymbolType = attr("type", SymbolType.from_wire, required=True)
    level: Optional[LevelValue] = attr("level", parse_level)
    width: Optional[int] = attr("width", int)
    height: Optional[int] = attr("height", int)  # PDF417 only
    size: Optional[int] = attr("size", int)
    align: Optional[Align] = attr("align", Align.from_wire)
    rotate: Optional[bool] = attr("rotate", parse_bool)

    def validate(self, mode: Mode) -> None:
        if not self.data:
            raise InvalidPayload("Symbol data must not be empty")

        width_range = symbol_width_range(self.symbol_type)
        if width_range is not None:
            _check_range(f"{self.symbol_type} width", self.width, *width_range)

        if self.symbol_type in PDF417_TYPES:
            _check_range("PDF417 height", self.height, 2, 8)
            _check_range("PDF417 size", self.size, 0, PDF417_MAX_SIZE)
        elif self.symbol_type == SymbolType.GS1_DATABAR_EXPANDED_STACKED:
            _check_range("Expanded stacked size", self.size, GS1_EXPANDED_STACKED_MIN_SIZE, MAX_DOTS)

        if self.level is not None:
            check_symbol_level(self.symbol_type, self.level)


# --- Normal mode only ---


@dataclass(frozen=True)
class Cut(Command):
    """Cut the paper."""

    TAG: ClassVar[str] = "cut"
    MODES: ClassVar[frozenset] = NORMAL_ONLY

    cut_type: CutType = attr("type", CutType.from_wire, required=True)


@dataclass(frozen=True)
class Hline(Command):
    """Draw a horizontal ruled line."""

    TAG: ClassVar[str] = "hline"
    MODES: ClassVar[frozenset] = NORMAL_ONLY

    x1: int = attr("x1", int, required=True)
    x2: int = attr("x2", int, required=True)
    style: Optional[LineStyle] = attr("style", LineStyle.from_wire)

    def validate(self, mode: Mode) -> None:
        _check_range("Hline x1", self.x1, 0, MAX_DOTS)
        _check_range("Hline x2", self.x2, 0, MAX_DOTS)


# --- Page mode only ---


@dataclass(frozen=True)
class Area(Command):
    """Define the page mode print area."""

    TAG: ClassVar[str] = "area"
    MODES: ClassVar[frozenset] = PAGE_ONLY

    x: int = attr("x", int, required=True)
    y: int = attr("y", int, required=True)
    width: int = attr("width", int, required=True)
    height: int = attr("height", int, required=True)

    def validate(self, mode: Mode) -> None:
        _check_range("Area x", self.x, 0, MAX_DOTS)
        _check_range("Area y", self.y, 0, MAX_DOTS)
        _check_range("Area width", self.width, 1, MAX_DOTS)
        _check_range("Area height", self.height, 1, MAX_DOTS)


@dataclass(frozen=True)
class Rectangle(Command):
    """Draw a rectangle in page mode."""

    TAG: ClassVar[str] = "rectangle"
    MODES: ClassVar[frozenset] = PAGE_ONLY

    x1: int = attr("x1", int, required=True)
    y1: int = attr("y1", int, required=True)
    x2: int = attr("x2", int, required=True)
    y2: int = attr("y2", int, required=True)
    style: Optional[LineStyle] = attr("style", LineStyle.from_wire)

    def validate(self, mode: Mode) -> None:
        for name in ("x1", "y1", "x2", "y2"):
            _check_range(f"Rectangle {name}", getattr(self, name), 0, MAX_DOTS)


@dataclass(frozen=True)
class Line(Command):
    """Draw a straight line in page mode."""

    TAG: ClassVar[str] = "line"
    MODES: ClassVar[frozenset] = PAGE_ONLY

    x1: int = attr("x1", int, required=True)
    y1: int = attr("y1", int, required=True)
    x2: int = attr("x2", int, required=True)
    y2: int = attr("y2", int, required=True)
    style: Optional[LineStyle] = attr("style", LineStyle.from_wire)

    def validate(self, mode: Mode) -> None:
        for name in ("x1", "y1", "x2", "y2"):
            _check_range(f"Line {name}", getattr(self, name), 0, MAX_DOTS)


@dataclass(frozen=True)
class Direction(Command):
    """Set the page mode print direction."""

    TAG: ClassVar[str] = "direction"
    MODES: ClassVar[frozenset] = PAGE_ONLY

    direction: PrintDirection = attr("dir", PrintDirection.from_wire, required=True)


@dataclass(frozen=True)
class Position(Command):
    """Move the page mode print position."""

    TAG: ClassVar[str] = "position"
    MODES: ClassVar[frozenset] = PAGE_ONLY

    x: int = attr("x", int, required=True)
    y: int = attr("y", int, required=True)

    def validate(self, mode: Mode) -> None:
        _check_range("Position x", self.x, 0, MAX_DOTS)
        _check_range("Position y", self.y, 0, MAX_DOTS)


COMMAND_TYPES: dict[str, type] = {
    cls.TAG: cls
    for cls in (Text, Feed, Image, Barcode, Symbol, Cut, Hline,
                Area, Rectangle, Line, Direction, Position)
}
