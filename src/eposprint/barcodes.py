"""
Barcode and 2D Symbol Catalogs for ePOS-Print.

Symbology tokens and the content rules the printer applies to barcode
data. The printer gives no useful diagnostics for malformed barcode data,
so the rules are checked locally before a command is accepted.

Binary data may be given with \\xnn, and \\\\ prints a backslash. Both are
passed through untouched.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .catalog import WireEnum
from .errors import InvalidPayload, UnknownCatalogValue


class BarcodeType(WireEnum):
    """1D barcode symbologies."""
    UPC_A = "upc_a"
    UPC_E = "upc_e"
    EAN13 = "ean13"
    JAN13 = "jan13"
    EAN8 = "ean8"
    JAN8 = "jan8"
    CODE39 = "code39"
    ITF = "itf"
    CODABAR = "codabar"
    CODE93 = "code93"
    CODE128 = "code128"
    GS1_128 = "gs1_128"
    GS1_DATABAR_OMNIDIRECTIONAL = "gs1_databar_omnidirectional"
    GS1_DATABAR_TRUNCATED = "gs1_databar_truncated"
    GS1_DATABAR_LIMITED = "gs1_databar_limited"
    GS1_DATABAR_EXPANDED = "gs1_databar_expanded"


class SymbolType(WireEnum):
    """2D symbol types."""
    PDF417_STANDARD = "pdf417_standard"
    PDF417_TRUNCATED = "pdf417_truncated"
    QRCODE_MODEL_1 = "qrcode_model_1"
    QRCODE_MODEL_2 = "qrcode_model_2"
    MAXICODE_MODE_2 = "maxicode_mode_2"
    MAXICODE_MODE_3 = "maxicode_mode_3"
    MAXICODE_MODE_4 = "maxicode_mode_4"
    MAXICODE_MODE_5 = "maxicode_mode_5"
    MAXICODE_MODE_6 = "maxicode_mode_6"
    GS1_DATABAR_STACKED = "gs1_databar_stacked"
    GS1_DATABAR_STACKED_OMNIDIRECTIONAL = "gs1_databar_stacked_omnidirectional"
    GS1_DATABAR_EXPANDED_STACKED = "gs1_databar_expanded_stacked"
    AZTECCODE_FULLRANGE = "azteccode_fullrange"
    AZTECCODE_COMPACT = "azteccode_compact"
    DATAMATRIX_SQUARE = "datamatrix_square"
    DATAMATRIX_RECTANGLE_8 = "datamatrix_rectangle_8"
    DATAMATRIX_RECTANGLE_12 = "datamatrix_rectangle_12"
    DATAMATRIX_RECTANGLE_16 = "datamatrix_rectangle_16"


class HRI(WireEnum):
    """Human readable interpretation position."""
    NONE = "none"
    ABOVE = "above"
    BELOW = "below"
    BOTH = "both"


class ErrorCorrectionLevel(WireEnum):
    """
    Symbol error correction levels.

    level_0 to level_8 are for PDF417, level_l to level_h for QR Code.
    Aztec Code takes a plain integer (see ErrorCorrectionInt).
    """
    LEVEL_0 = "level_0"
    LEVEL_1 = "level_1"
    LEVEL_2 = "level_2"
    LEVEL_3 = "level_3"
    LEVEL_4 = "level_4"
    LEVEL_5 = "level_5"
    LEVEL_6 = "level_6"
    LEVEL_7 = "level_7"
    LEVEL_8 = "level_8"
    LEVEL_L = "level_l"
    LEVEL_M = "level_m"
    LEVEL_Q = "level_q"
    LEVEL_H = "level_h"
    DEFAULT = "default"


@dataclass(frozen=True)
class ErrorCorrectionInt:
    """
    Integer error correction level (Aztec Code, 5-95 percent).

    A level decoded from the wire keeps its original token (e.g. "05"),
    which is what gets rendered again.
    """

    value: int
    token: Optional[str] = field(default=None, compare=False)

    def to_wire(self) -> str:
        return self.token if self.token is not None else str(self.value)

    def __str__(self) -> str:
        return self.to_wire()


LevelValue = Union[ErrorCorrectionLevel, ErrorCorrectionInt]

_DIGITS = re.compile(r"[0-9]+")


def parse_level(token: str) -> LevelValue:
    """Decode a level token; plain ASCII integers become ErrorCorrectionInt."""
    try:
        return ErrorCorrectionLevel.from_wire(token)
    except UnknownCatalogValue:
        if _DIGITS.fullmatch(token):
            return ErrorCorrectionInt(int(token), token)
        raise


# --- Symbol families ---

PDF417_TYPES = frozenset({SymbolType.PDF417_STANDARD, SymbolType.PDF417_TRUNCATED})
QRCODE_TYPES = frozenset({SymbolType.QRCODE_MODEL_1, SymbolType.QRCODE_MODEL_2})
MAXICODE_TYPES = frozenset({
    SymbolType.MAXICODE_MODE_2,
    SymbolType.MAXICODE_MODE_3,
    SymbolType.MAXICODE_MODE_4,
    SymbolType.MAXICODE_MODE_5,
    SymbolType.MAXICODE_MODE_6,
})
GS1_STACKED_TYPES = frozenset({
    SymbolType.GS1_DATABAR_STACKED,
    SymbolType.GS1_DATABAR_STACKED_OMNIDIRECTIONAL,
    SymbolType.GS1_DATABAR_EXPANDED_STACKED,
})
AZTEC_TYPES = frozenset({SymbolType.AZTECCODE_FULLRANGE, SymbolType.AZTECCODE_COMPACT})
DATAMATRIX_TYPES = frozenset({
    SymbolType.DATAMATRIX_SQUARE,
    SymbolType.DATAMATRIX_RECTANGLE_8,
    SymbolType.DATAMATRIX_RECTANGLE_12,
    SymbolType.DATAMATRIX_RECTANGLE_16,
})

PDF417_LEVELS = frozenset({
    ErrorCorrectionLevel.LEVEL_0,
    ErrorCorrectionLevel.LEVEL_1,
    ErrorCorrectionLevel.LEVEL_2,
    ErrorCorrectionLevel.LEVEL_3,
    ErrorCorrectionLevel.LEVEL_4,
    ErrorCorrectionLevel.LEVEL_5,
    ErrorCorrectionLevel.LEVEL_6,
    ErrorCorrectionLevel.LEVEL_7,
    ErrorCorrectionLevel.LEVEL_8,
})
QRCODE_LEVELS = frozenset({
    ErrorCorrectionLevel.LEVEL_L,
    ErrorCorrectionLevel.LEVEL_M,
    ErrorCorrectionLevel.LEVEL_Q,
    ErrorCorrectionLevel.LEVEL_H,
})

AZTEC_LEVEL_RANGE = (5, 95)
GS1_EXPANDED_STACKED_MIN_SIZE = 106
PDF417_MAX_SIZE = 30


def symbol_width_range(symbol_type: SymbolType) -> Optional[tuple[int, int]]:
    """Valid module width for a symbol type, or None where width is ignored."""
    if symbol_type in PDF417_TYPES or symbol_type in GS1_STACKED_TYPES:
        return (2, 8)
    if symbol_type in QRCODE_TYPES:
        return (1, 16)
    if symbol_type in AZTEC_TYPES or symbol_type in DATAMATRIX_TYPES:
        return (2, 16)
    return None


def check_symbol_level(symbol_type: SymbolType, level: LevelValue) -> None:
    """Reject an error correction level the symbol type cannot use."""
    if level == ErrorCorrectionLevel.DEFAULT:
        return

    if isinstance(level, ErrorCorrectionInt):
        low, high = AZTEC_LEVEL_RANGE
        if symbol_type not in AZTEC_TYPES:
            raise InvalidPayload(f"Integer level {level} is only valid for Aztec Code")
        if not low <= level.value <= high:
            raise InvalidPayload(f"Aztec level must be {low}-{high}, got {level.value}")
        return

    if symbol_type in PDF417_TYPES and level not in PDF417_LEVELS:
        raise InvalidPayload(f"{level} is not a PDF417 level")
    if symbol_type in QRCODE_TYPES and level not in QRCODE_LEVELS:
        raise InvalidPayload(f"{level} is not a QR Code level")
    if symbol_type in AZTEC_TYPES:
        raise InvalidPayload(f"Aztec Code takes an integer level, got {level}")


# --- 1D barcode content rules ---

CODE39_CHARS = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./")
CODABAR_START_STOP = frozenset("ABCDabcd")
CODABAR_CHARS = frozenset("0123456789-$:/.+")
ASCII_CHARS = frozenset(chr(i) for i in range(0x80))

# Characters allowed after "{" in two-character escapes
CODE128_ESCAPES = frozenset("1234ABCS{")
GS1_128_ESCAPES = frozenset("13()*{")
GS1_EXPANDED_ESCAPES = frozenset("1()")

# (bare digits, digits with check digit)
CHECK_DIGIT_LENGTHS = {
    BarcodeType.UPC_A: (11, 12),
    BarcodeType.UPC_E: (11, 12),
    BarcodeType.EAN13: (12, 13),
    BarcodeType.JAN13: (12, 13),
    BarcodeType.EAN8: (7, 8),
    BarcodeType.JAN8: (7, 8),
}

GTIN_TYPES = frozenset({
    BarcodeType.GS1_DATABAR_OMNIDIRECTIONAL,
    BarcodeType.GS1_DATABAR_TRUNCATED,
    BarcodeType.GS1_DATABAR_LIMITED,
})

# \xnn stands for one byte, \\ for one backslash
_BINARY_ESCAPE = re.compile(r"\\x([0-9A-Fa-f]{2})|\\\\")


def _collapse_binary_escapes(data: str) -> tuple[str, frozenset]:
    """
    Replace each binary escape with the character the printer receives.

    Returns:
        (collapsed data, positions in it that came from an escape)
    """
    out = []
    escaped = set()
    pos = 0
    for match in _BINARY_ESCAPE.finditer(data):
        out.extend(data[pos:match.start()])
        escaped.add(len(out))
        out.append(chr(int(match.group(1), 16)) if match.group(1) else "\\")
        pos = match.end()
    out.extend(data[pos:])
    return "".join(out), frozenset(escaped)


def _unencodable(data: str, escaped: frozenset, allowed, start: int = 0, end: Optional[int] = None) -> str:
    """Literal characters in data[start:end] outside the allowed set."""
    end = len(data) if end is None else end
    bad = {data[i] for i in range(start, end) if i not in escaped and data[i] not in allowed}
    return "".join(sorted(bad))


def _check_escapes(data: str, allowed: frozenset, name: str) -> None:
    """Walk "{" escapes; every "{" must pair with an allowed character."""
    i = 0
    while i < len(data):
        if data[i] == "{":
            if i + 1 >= len(data) or data[i + 1] not in allowed:
                raise InvalidPayload(f"Invalid {name} escape at position {i}: {data[i:i + 2]!r}")
            i += 2
        else:
            i += 1


def check_barcode_data(barcode_type: BarcodeType, data: str) -> None:
    """
    Validate barcode data against the symbology's structural rules.

    Binary escapes count as the single character they stand for when
    digits and lengths are checked, and are exempt from character set
    checks. The data itself is sent unchanged.

    Raises:
        InvalidPayload: If the data cannot be encoded by the printer
    """
    if not data:
        raise InvalidPayload("Barcode data must not be empty")

    name = barcode_type.value
    raw = data
    data, escaped = _collapse_binary_escapes(raw)

    if barcode_type in CHECK_DIGIT_LENGTHS:
        lengths = CHECK_DIGIT_LENGTHS[barcode_type]
        if not _DIGITS.fullmatch(data) or len(data) not in lengths:
            raise InvalidPayload(
                f"{name} needs {lengths[0]} or {lengths[1]} digits, got {raw!r}"
            )
        if barcode_type == BarcodeType.UPC_E and data[0] != "0":
            raise InvalidPayload(f"upc_e data must start with 0, got {raw!r}")

    elif barcode_type == BarcodeType.CODE39:
        bad = _unencodable(data, escaped, CODE39_CHARS)
        if bad:
            raise InvalidPayload(f"code39 cannot encode {bad!r}")

    elif barcode_type == BarcodeType.ITF:
        if not _DIGITS.fullmatch(data) or len(data) % 2:
            raise InvalidPayload(f"itf needs an even number of digits, got {raw!r}")

    elif barcode_type == BarcodeType.CODABAR:
        if len(data) < 2 or data[0] not in CODABAR_START_STOP or data[-1] not in CODABAR_START_STOP:
            raise InvalidPayload("codabar data must begin and end with A-D or a-d")
        bad = _unencodable(data, escaped, CODABAR_CHARS, 1, len(data) - 1)
        if bad:
            raise InvalidPayload(f"codabar cannot encode {bad!r}")

    elif barcode_type == BarcodeType.CODE93:
        if _unencodable(data, escaped, ASCII_CHARS):
            raise InvalidPayload("code93 only encodes 7-bit ASCII")

    elif barcode_type == BarcodeType.CODE128:
        if data[:2] not in ("{A", "{B", "{C"):
            raise InvalidPayload("code128 data must begin with {A, {B or {C")
        _check_escapes(data, CODE128_ESCAPES, name)

    elif barcode_type == BarcodeType.GS1_128:
        _check_escapes(data, GS1_128_ESCAPES, name)

    elif barcode_type in GTIN_TYPES:
        if not _DIGITS.fullmatch(data) or len(data) != 13:
            raise InvalidPayload(f"{name} needs a 13-digit GTIN, got {raw!r}")
        if barcode_type == BarcodeType.GS1_DATABAR_LIMITED and data[0] not in "01":
            raise InvalidPayload("gs1_databar_limited GTIN must start with 0 or 1")

    elif barcode_type == BarcodeType.GS1_DATABAR_EXPANDED:
        _check_escapes(data, GS1_EXPANDED_ESCAPES, name)
