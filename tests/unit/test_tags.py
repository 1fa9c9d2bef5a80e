"""Unit tests for the marker table."""

from __future__ import annotations

import pytest

from minipack.codec import tags
from minipack.codec.tags import TAGS, Family, lookup


class TestTagTable:
    """Test the static marker table."""

    def test_table_is_total(self) -> None:
        """Every byte value has an entry."""
        assert len(TAGS) == 256
        assert [tag.marker for tag in TAGS] == list(range(256))

    @pytest.mark.parametrize(
        ("marker", "family", "embedded"),
        [
            (0x00, Family.POSITIVE_FIXINT, 0),
            (0x7F, Family.POSITIVE_FIXINT, 127),
            (0x80, Family.FIXMAP, 0),
            (0x8F, Family.FIXMAP, 15),
            (0x90, Family.FIXARRAY, 0),
            (0x9F, Family.FIXARRAY, 15),
            (0xA0, Family.FIXSTR, 0),
            (0xBF, Family.FIXSTR, 31),
            (0xE0, Family.NEGATIVE_FIXINT, -32),
            (0xFF, Family.NEGATIVE_FIXINT, -1),
        ],
    )
    def test_fixed_forms(self, marker: int, family: Family, embedded: int) -> None:
        """Fixed forms carry their value in the marker."""
        tag = lookup(marker)
        assert tag.family is family
        assert tag.embedded == embedded
        assert tag.width == 0

    @pytest.mark.parametrize(
        ("marker", "family", "width"),
        [
            (tags.NIL, Family.NIL, 0),
            (tags.FALSE, Family.FALSE, 0),
            (tags.TRUE, Family.TRUE, 0),
            (tags.BIN_8, Family.BIN, 1),
            (tags.BIN_16, Family.BIN, 2),
            (tags.BIN_32, Family.BIN, 4),
            (tags.FLOAT_32, Family.FLOAT32, 4),
            (tags.FLOAT_64, Family.FLOAT64, 8),
            (tags.UINT_8, Family.UINT, 1),
            (tags.UINT_64, Family.UINT, 8),
            (tags.INT_16, Family.INT, 2),
            (tags.INT_32, Family.INT, 4),
            (tags.STR_8, Family.STR, 1),
            (tags.STR_32, Family.STR, 4),
            (tags.ARRAY_16, Family.ARRAY, 2),
            (tags.ARRAY_32, Family.ARRAY, 4),
            (tags.MAP_16, Family.MAP, 2),
            (tags.MAP_32, Family.MAP, 4),
        ],
    )
    def test_explicit_markers(self, marker: int, family: Family, width: int) -> None:
        """Explicit markers announce the width of the following field."""
        tag = lookup(marker)
        assert tag.family is family
        assert tag.width == width
        assert tag.embedded is None
        assert tag.supported

    def test_reserved_marker(self) -> None:
        """0xC1 is never used."""
        tag = lookup(0xC1)
        assert tag.family is Family.UNUSED
        assert not tag.supported

    @pytest.mark.parametrize("marker", [0xC7, 0xC8, 0xC9, 0xD4, 0xD5, 0xD6, 0xD7, 0xD8])
    def test_extension_markers_unsupported(self, marker: int) -> None:
        """Extension markers are known but rejected."""
        tag = lookup(marker)
        assert tag.family is Family.EXT
        assert not tag.supported

    def test_names(self) -> None:
        """Marker names follow the format's vocabulary."""
        assert lookup(tags.UINT_16).name == "uint16"
        assert lookup(tags.MAP_32).name == "map32"
        assert lookup(tags.STR_8).name == "str8"
        assert lookup(tags.FIXEXT_16).name == "fixext16"
        assert lookup(0x82).name == "fixmap"
        assert lookup(0xC0).name == "nil"

    def test_lookup_out_of_range(self) -> None:
        """Only byte values can be looked up."""
        with pytest.raises(ValueError, match="0-255"):
            lookup(256)
