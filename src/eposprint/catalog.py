"""
Formatting and Layout Catalogs for ePOS-Print.

Each enumeration value is the exact attribute token the printer expects.
Tokens are case sensitive and must match the ePOS-Print XML manual
character for character.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import UnknownCatalogValue


class WireEnum(str, Enum):
    """Enumeration whose value is its wire token."""

    @classmethod
    def from_wire(cls, token: str) -> "WireEnum":
        """Look up a member by its exact wire token."""
        for member in cls:
            if member.value == token:
                return member
        raise UnknownCatalogValue(cls.__name__, token)

    def to_wire(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class Align(WireEnum):
    """Horizontal alignment."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Font(WireEnum):
    """Printer-resident fonts."""
    FONT_A = "font_a"
    FONT_B = "font_b"
    FONT_C = "font_c"
    FONT_D = "font_d"
    FONT_E = "font_e"


class Color(WireEnum):
    """Print color (only on two-color models)."""
    NONE = "none"
    COLOR_1 = "color_1"
    COLOR_2 = "color_2"
    COLOR_3 = "color_3"
    COLOR_4 = "color_4"


class CutType(WireEnum):
    """Paper cut behaviour."""
    NO_FEED = "no_feed"  # Cut without feeding
    FEED = "feed"        # Feed to the cut position, then cut
    RESERVE = "reserve"  # Cut once printing reaches the cut position


class FeedPos(WireEnum):
    """Feed target for label or black mark paper."""
    PEELING = "peeling"
    CUTTING = "cutting"
    CURRENT_TOF = "current_tof"  # Top of the current label
    NEXT_TOF = "next_tof"        # Top of the next label


class LineStyle(WireEnum):
    """Ruled line and rectangle styles."""
    THIN = "thin"
    MEDIUM = "medium"
    THICK = "thick"
    THIN_DOUBLE = "thin_double"
    MEDIUM_DOUBLE = "medium_double"
    THICK_DOUBLE = "thick_double"


class PrintDirection(WireEnum):
    """Page mode print direction."""
    LEFT_TO_RIGHT = "left_to_right"
    BOTTOM_TO_TOP = "bottom_to_top"
    RIGHT_TO_LEFT = "right_to_left"
    TOP_TO_BOTTOM = "top_to_bottom"


class Lang(WireEnum):
    """Text language."""
    DE = "de"
    FR = "fr"
    EN = "en"
    IT = "it"
    ES = "es"
    JA = "ja"
    JA_JP = "ja-jp"
    KO = "ko"
    KO_KR = "ko-kr"
    ZH_HANS = "zh-hans"
    ZH_CN = "zh-cn"
    ZH_HANT = "zh-hant"
    ZH_TW = "zh-tw"


@dataclass(frozen=True)
class OtherLang:
    """A language token outside the Lang catalog, kept verbatim."""

    token: str

    def to_wire(self) -> str:
        return self.token

    def __str__(self) -> str:
        return self.token


LangValue = Union[Lang, OtherLang]


def parse_lang(token: str) -> LangValue:
    """Decode a lang token, falling back to OtherLang for unknown values."""
    try:
        return Lang.from_wire(token)
    except UnknownCatalogValue:
        return OtherLang(token)
