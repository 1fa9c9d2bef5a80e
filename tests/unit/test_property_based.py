"""Property-based tests using hypothesis."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from minipack import (
    Array,
    Bin,
    Bool,
    Float32,
    Float64,
    Int,
    Map,
    Null,
    Str,
    TruncatedInputError,
    UInt,
    Value,
    decode,
    encode,
    encoded_size,
    pack,
    unpack,
)
from minipack.models import INT64_MAX, INT64_MIN, UINT64_MAX

scalars = st.one_of(
    st.just(Null()),
    st.booleans().map(Bool),
    st.integers(min_value=INT64_MIN, max_value=INT64_MAX).map(Int),
    st.integers(min_value=INT64_MAX + 1, max_value=UINT64_MAX).map(UInt),
    st.floats(width=32).map(Float32),
    st.floats().map(Float64),
    st.text(max_size=40).map(Str),
    st.binary(max_size=40).map(Bin),
)

values = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=6).map(Array),
        st.dictionaries(st.text(max_size=8), children, max_size=6).map(Map),
    ),
    max_leaves=25,
)


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(value=values)
    def test_encode_decode_roundtrip(self, value: Value) -> None:
        """decode(encode(v)) gives back v and the full length."""
        data = encode(value)

        assert decode(data) == (value, len(data))

    @given(value=values)
    def test_encode_deterministic(self, value: Value) -> None:
        """Encoding the same value twice gives the same bytes."""
        assert encode(value) == encode(value)

    @given(value=values)
    def test_size_matches(self, value: Value) -> None:
        """encoded_size() agrees with the encoder."""
        assert encoded_size(value) == len(encode(value))

    @given(value=values, data=st.data())
    def test_prefix_is_truncated(self, value: Value, data: st.DataObject) -> None:
        """Any strict prefix of an encoding fails with TruncatedInputError."""
        encoded = encode(value)
        end = data.draw(st.integers(min_value=0, max_value=len(encoded) - 1))

        with pytest.raises(TruncatedInputError):
            decode(encoded[:end])

    @given(number=st.integers(min_value=INT64_MIN, max_value=UINT64_MAX))
    def test_integer_roundtrip(self, number: int) -> None:
        """Every 64-bit integer survives with its exact value."""
        value = Int(number) if number <= INT64_MAX else UInt(number)
        decoded, _ = decode(encode(value))

        assert decoded.value == number

    @given(number=st.floats(width=32))
    def test_float32_never_widened(self, number: float) -> None:
        """Float32 always encodes to 5 bytes with the 0xCA marker."""
        data = encode(Float32(number))

        assert len(data) == 5
        assert data[0] == 0xCA


class TestNativeProperties:
    """Property-based tests for pack/unpack."""

    @given(
        obj=st.recursive(
            st.one_of(
                st.none(),
                st.booleans(),
                st.integers(min_value=INT64_MIN, max_value=UINT64_MAX),
                # Plain nan never equals itself, so native data skips it
                st.floats(allow_nan=False),
                st.text(max_size=20),
                st.binary(max_size=20),
            ),
            lambda children: st.one_of(
                st.lists(children, max_size=5),
                st.dictionaries(st.text(max_size=5), children, max_size=5),
            ),
            max_leaves=20,
        )
    )
    def test_pack_unpack_roundtrip(self, obj: object) -> None:
        """Plain data survives pack/unpack."""
        assert unpack(pack(obj)) == obj
