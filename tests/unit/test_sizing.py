"""Tests for encoded size calculation."""

from __future__ import annotations

import pytest

from minipack import (
    Array,
    Bin,
    Float32,
    Float64,
    Int,
    Map,
    Null,
    Str,
    UInt,
    ValueTooLargeError,
    encode,
    encoded_size,
)
from minipack.models import UINT64_MAX
from minipack.utils import header_size, int_size


class TestIntSize:
    """Test integer sizing."""

    @pytest.mark.parametrize(
        ("number", "size"),
        [
            (0, 1),
            (127, 1),
            (128, 2),
            (256, 3),
            (65536, 5),
            (2**32, 9),
            (UINT64_MAX, 9),
            (-32, 1),
            (-33, 2),
            (-129, 3),
            (-32769, 5),
            (-(2**31) - 1, 9),
        ],
    )
    def test_int_size(self, number: int, size: int) -> None:
        """Sizes follow the width ladder."""
        assert int_size(number) == size

    def test_too_large(self) -> None:
        """Integers beyond 64 bits have no size."""
        with pytest.raises(ValueTooLargeError):
            int_size(UINT64_MAX + 1)


class TestHeaderSize:
    """Test header sizing."""

    def test_str_headers(self) -> None:
        """fixstr, str8, str16, str32."""
        assert header_size(31, 32) == 1
        assert header_size(32, 32) == 2
        assert header_size(256, 32) == 3
        assert header_size(65536, 32) == 5

    def test_array_headers(self) -> None:
        """Arrays have no 8-bit form."""
        assert header_size(15, 16, has_8bit=False) == 1
        assert header_size(16, 16, has_8bit=False) == 3

    def test_too_large(self) -> None:
        """Lengths beyond 32 bits have no header."""
        with pytest.raises(ValueTooLargeError):
            header_size(2**32)


class TestEncodedSize:
    """Test encoded_size() against the encoder."""

    @pytest.mark.parametrize(
        "value",
        [
            Null(),
            Int(-33),
            UInt(UINT64_MAX),
            Float32(1.0),
            Float64(1.0),
            Str("é" * 20),
            Bin(b"\x00" * 300),
            Array([Int(i) for i in range(20)]),
            Map({"a": Array([Map({"b": Str("c")})]), "z": Null()}),
        ],
    )
    def test_matches_encoder(self, value) -> None:
        """Size equals the length of the encoding."""
        assert encoded_size(value) == len(encode(value))

    def test_native_data(self, scenario_bytes: bytes) -> None:
        """Native data is converted first."""
        assert encoded_size({"a": 1, "b": [-1, "x"]}) == len(scenario_bytes)
