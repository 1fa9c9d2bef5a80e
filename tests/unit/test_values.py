"""Unit tests for the value model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

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
    UInt,
    Value,
    ValueKind,
)
from minipack.models import INT64_MAX, INT64_MIN, UINT64_MAX


class TestConstruction:
    """Test building values."""

    def test_positional_and_keyword(self) -> None:
        """Scalars accept their payload either way."""
        assert Int(5) == Int(value=5)
        assert Str("x").value == "x"
        assert Array([Null()]).items == (Null(),)
        assert Map({"a": Null()}).entries == (("a", Null()),)

    def test_too_many_arguments(self) -> None:
        """Only one positional payload is accepted."""
        with pytest.raises(TypeError):
            Int(1, 2)

        with pytest.raises(TypeError):
            Int(1, value=2)

    def test_kinds(self) -> None:
        """Every variant carries its discriminator."""
        assert Null.kind is ValueKind.NULL
        assert Bool(True).kind is ValueKind.BOOL
        assert UInt(1).kind is ValueKind.UINT
        assert Float32(1.0).kind is ValueKind.FLOAT32
        assert Map().kind is ValueKind.MAP

    def test_bare_value_rejected(self) -> None:
        """The base class is abstract."""
        with pytest.raises(ValidationError, match="abstract"):
            Value()

    def test_frozen(self) -> None:
        """Values are immutable."""
        value = Int(1)

        with pytest.raises(ValidationError):
            value.value = 2  # type: ignore[misc]


class TestScalarValidation:
    """Test payload constraints."""

    def test_int_range(self) -> None:
        """Int is a signed 64-bit integer."""
        assert Int(INT64_MIN).value == INT64_MIN
        assert Int(INT64_MAX).value == INT64_MAX

        with pytest.raises(ValidationError):
            Int(INT64_MAX + 1)

        with pytest.raises(ValidationError):
            Int(INT64_MIN - 1)

    def test_uint_range(self) -> None:
        """UInt is an unsigned 64-bit integer."""
        assert UInt(UINT64_MAX).value == UINT64_MAX

        with pytest.raises(ValidationError):
            UInt(-1)

        with pytest.raises(ValidationError):
            UInt(UINT64_MAX + 1)

    def test_strict_types(self) -> None:
        """Payloads are not coerced across types."""
        with pytest.raises(ValidationError):
            Int(True)

        with pytest.raises(ValidationError):
            Bool(1)

        with pytest.raises(ValidationError):
            Str(b"x")

        with pytest.raises(ValidationError):
            Bin("x")

    def test_float32_rounds_to_binary32(self) -> None:
        """Float32 stores exactly what goes on the wire."""
        assert Float32(0.1).value == 0.10000000149011612
        assert Float64(0.1).value == 0.1

    def test_float32_overflow(self) -> None:
        """Values beyond binary32 range are rejected."""
        with pytest.raises(ValidationError, match="32-bit"):
            Float32(1e300)

    def test_bin_accepts_buffers(self) -> None:
        """bytearray and memoryview are frozen to bytes."""
        assert Bin(bytearray(b"ab")).value == b"ab"
        assert Bin(memoryview(b"cd")).value == b"cd"


class TestEquality:
    """Test value comparison."""

    def test_int_and_uint_compare_by_value(self) -> None:
        """The wire does not record which integer variant was used."""
        assert Int(5) == UInt(5)
        assert hash(Int(5)) == hash(UInt(5))
        assert Int(5) != UInt(6)

    def test_float_widths_differ(self) -> None:
        """Float provenance is part of the value."""
        assert Float32(1.0) != Float64(1.0)
        assert Float32(float("nan")) != Float64(float("nan"))

    def test_nan_equals_nan(self) -> None:
        """Two NaN payloads of the same width are the same value."""
        assert Float64(float("nan")) == Float64(float("nan"))
        assert hash(Float64(float("nan"))) == hash(Float64(float("nan")))
        assert Float32(float("nan")) == Float32(float("nan"))
        assert Float64(float("nan")) != Float64(0.0)
        assert Map({"x": Float64(float("nan"))}) == Map({"x": Float64(float("nan"))})

    def test_bool_is_not_int(self) -> None:
        """Bool(True) and Int(1) are different values."""
        assert Int(1) != Bool(True)
        assert Bool(True) != Int(1)

    def test_nested_equality(self) -> None:
        """Compound values compare element-wise."""
        assert Array([Int(1), Str("x")]) == Array([UInt(1), Str("x")])
        assert Map({"a": Int(1)}) != Map({"a": Int(2)})


class TestCompound:
    """Test Array and Map."""

    def test_array_items_must_be_values(self) -> None:
        """Native data must go through to_value()."""
        with pytest.raises(ValidationError, match="to_value"):
            Array([1, 2])

    def test_map_keys_must_be_str(self) -> None:
        """Non-string keys are rejected at construction."""
        with pytest.raises(ValidationError):
            Map({1: Int(1)})

    def test_map_duplicate_keys(self) -> None:
        """Keys are unique."""
        with pytest.raises(ValidationError, match="duplicate"):
            Map([("a", Int(1)), ("a", Int(2))])

    def test_map_access(self) -> None:
        """Maps keep insertion order and support lookup."""
        value = Map([("z", Int(1)), ("a", Int(2))])

        assert value.keys() == ["z", "a"]
        assert value["a"] == Int(2)
        assert len(value) == 2

        with pytest.raises(KeyError):
            value["missing"]

    def test_array_access(self) -> None:
        """Arrays support len() and indexing."""
        value = Array([Int(1), Str("x")])

        assert len(value) == 2
        assert value[1] == Str("x")

    def test_to_native(self) -> None:
        """to_native() returns plain Python data."""
        value = Map(
            {
                "n": Null(),
                "b": Bool(False),
                "i": Int(-3),
                "u": UInt(UINT64_MAX),
                "f": Float64(2.5),
                "s": Str("x"),
                "raw": Bin(b"\x00"),
                "list": Array([Int(1), Array([])]),
            }
        )

        assert value.to_native() == {
            "n": None,
            "b": False,
            "i": -3,
            "u": UINT64_MAX,
            "f": 2.5,
            "s": "x",
            "raw": b"\x00",
            "list": [1, []],
        }
