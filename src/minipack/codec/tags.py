"""MessagePack marker table.

Every encoded value starts with one marker byte. Some markers carry a small
value in their low bits (the "fixed forms"), the rest announce a family and
the byte width of the length or payload field that follows.

    0x00-0x7f  positive fixint      0xc0       nil
    0x80-0x8f  fixmap               0xc1       never used
    0x90-0x9f  fixarray             0xc2/0xc3  false/true
    0xa0-0xbf  fixstr               0xe0-0xff  negative fixint

The table is built once at import time and is shared read-only by the
encoder and the decoder.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Family(enum.Enum):
    """Semantic class of a marker byte."""

    POSITIVE_FIXINT = "positive fixint"
    FIXMAP = "fixmap"
    FIXARRAY = "fixarray"
    FIXSTR = "fixstr"
    NIL = "nil"
    UNUSED = "never used"
    FALSE = "false"
    TRUE = "true"
    BIN = "bin"
    EXT = "ext"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    UINT = "uint"
    INT = "int"
    STR = "str"
    ARRAY = "array"
    MAP = "map"
    NEGATIVE_FIXINT = "negative fixint"


# Fixed-form ranges
POSITIVE_FIXINT = 0x00
POSITIVE_FIXINT_MAX = 0x7F
FIXMAP = 0x80
FIXMAP_MAX = 0x8F
FIXARRAY = 0x90
FIXARRAY_MAX = 0x9F
FIXSTR = 0xA0
FIXSTR_MAX = 0xBF
NEGATIVE_FIXINT = 0xE0
NEGATIVE_FIXINT_MAX = 0xFF

# Explicit-width markers
NIL = 0xC0
NEVER_USED = 0xC1
FALSE = 0xC2
TRUE = 0xC3
BIN_8 = 0xC4
BIN_16 = 0xC5
BIN_32 = 0xC6
EXT_8 = 0xC7
EXT_16 = 0xC8
EXT_32 = 0xC9
FLOAT_32 = 0xCA
FLOAT_64 = 0xCB
UINT_8 = 0xCC
UINT_16 = 0xCD
UINT_32 = 0xCE
UINT_64 = 0xCF
INT_8 = 0xD0
INT_16 = 0xD1
INT_32 = 0xD2
INT_64 = 0xD3
FIXEXT_1 = 0xD4
FIXEXT_2 = 0xD5
FIXEXT_4 = 0xD6
FIXEXT_8 = 0xD7
FIXEXT_16 = 0xD8
STR_8 = 0xD9
STR_16 = 0xDA
STR_32 = 0xDB
ARRAY_16 = 0xDC
ARRAY_32 = 0xDD
MAP_16 = 0xDE
MAP_32 = 0xDF

# Exclusive upper bounds of the fixed forms' embedded counts
FIXMAP_LIMIT = 16
FIXARRAY_LIMIT = 16
FIXSTR_LIMIT = 32
NEGATIVE_FIXINT_MIN = -32


@dataclass(frozen=True)
class Tag:
    """One entry of the marker table.

    Attributes:
        marker: The leading byte (0x00-0xFF)
        family: What the marker denotes
        width: Byte width of the field following the marker. For bin/str/
            array/map/ext this is the length field; for numbers it is the
            payload itself. Zero for fixed forms and nil/bool.
        embedded: Value or count carried in the marker itself (fixed forms
            only), otherwise None
    """

    marker: int
    family: Family
    width: int = 0
    embedded: int | None = None

    @property
    def name(self) -> str:
        """Human-readable marker name, e.g. ``uint16`` or ``fixstr``."""
        if self.marker in _FIXEXT_SIZES:
            return f"fixext{_FIXEXT_SIZES[self.marker]}"
        if self.family in _SIZED_FAMILIES:
            return f"{self.family.value}{self.width * 8}"
        return self.family.value

    @property
    def supported(self) -> bool:
        """False for markers the decoder must reject."""
        return self.family not in (Family.UNUSED, Family.EXT)


_FIXEXT_SIZES = {FIXEXT_1: 1, FIXEXT_2: 2, FIXEXT_4: 4, FIXEXT_8: 8, FIXEXT_16: 16}

_SIZED_FAMILIES = frozenset(
    {Family.BIN, Family.EXT, Family.UINT, Family.INT, Family.STR, Family.ARRAY, Family.MAP}
)

_EXPLICIT: dict[int, tuple[Family, int]] = {
    NIL: (Family.NIL, 0),
    NEVER_USED: (Family.UNUSED, 0),
    FALSE: (Family.FALSE, 0),
    TRUE: (Family.TRUE, 0),
    BIN_8: (Family.BIN, 1),
    BIN_16: (Family.BIN, 2),
    BIN_32: (Family.BIN, 4),
    EXT_8: (Family.EXT, 1),
    EXT_16: (Family.EXT, 2),
    EXT_32: (Family.EXT, 4),
    FLOAT_32: (Family.FLOAT32, 4),
    FLOAT_64: (Family.FLOAT64, 8),
    UINT_8: (Family.UINT, 1),
    UINT_16: (Family.UINT, 2),
    UINT_32: (Family.UINT, 4),
    UINT_64: (Family.UINT, 8),
    INT_8: (Family.INT, 1),
    INT_16: (Family.INT, 2),
    INT_32: (Family.INT, 4),
    INT_64: (Family.INT, 8),
    FIXEXT_1: (Family.EXT, 0),
    FIXEXT_2: (Family.EXT, 0),
    FIXEXT_4: (Family.EXT, 0),
    FIXEXT_8: (Family.EXT, 0),
    FIXEXT_16: (Family.EXT, 0),
    STR_8: (Family.STR, 1),
    STR_16: (Family.STR, 2),
    STR_32: (Family.STR, 4),
    ARRAY_16: (Family.ARRAY, 2),
    ARRAY_32: (Family.ARRAY, 4),
    MAP_16: (Family.MAP, 2),
    MAP_32: (Family.MAP, 4),
}


def _build_table() -> tuple[Tag, ...]:
    table = []
    for marker in range(256):
        if marker <= POSITIVE_FIXINT_MAX:
            tag = Tag(marker, Family.POSITIVE_FIXINT, embedded=marker)
        elif marker <= FIXMAP_MAX:
            tag = Tag(marker, Family.FIXMAP, embedded=marker & 0x0F)
        elif marker <= FIXARRAY_MAX:
            tag = Tag(marker, Family.FIXARRAY, embedded=marker & 0x0F)
        elif marker <= FIXSTR_MAX:
            tag = Tag(marker, Family.FIXSTR, embedded=marker & 0x1F)
        elif marker >= NEGATIVE_FIXINT:
            # Sign-extend the byte
            tag = Tag(marker, Family.NEGATIVE_FIXINT, embedded=marker - 0x100)
        else:
            family, width = _EXPLICIT[marker]
            tag = Tag(marker, family, width=width)
        table.append(tag)
    return tuple(table)


TAGS: tuple[Tag, ...] = _build_table()


def lookup(marker: int) -> Tag:
    """Return the table entry for a leading byte.

    Raises:
        ValueError: If marker is not a byte value
    """
    if not 0 <= marker <= 0xFF:
        raise ValueError(f"marker must be 0-255, got {marker}")
    return TAGS[marker]
