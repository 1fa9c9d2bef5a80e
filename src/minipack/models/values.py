"""Concrete value variants.

Scalars take their payload positionally or as ``value=``; ``Array`` takes
its items and ``Map`` its entries the same way:

    >>> Int(-1), Float32(0.5), Str("x"), Bin(b"\\x00")
    >>> Array([Int(1), Null()])
    >>> Map({"depth": Float64(12.5)})
"""

from __future__ import annotations

import math
import struct
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import Field, StrictStr, field_validator

from .base import Value, ValueKind

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_F32 = struct.Struct(">f")


class _Scalar(Value):
    """Variant with a single ``value`` field that may be given positionally."""

    def __init__(self, *args: Any, **data: Any) -> None:
        if args:
            if len(args) > 1 or "value" in data:
                raise TypeError(f"{type(self).__name__} takes a single value")
            data["value"] = args[0]
        super().__init__(**data)

    def to_native(self) -> Any:
        return self.value  # type: ignore[attr-defined]


class Null(Value):
    """The nil value."""

    kind: ClassVar[ValueKind] = ValueKind.NULL

    def to_native(self) -> None:
        return None


class Bool(_Scalar):
    kind: ClassVar[ValueKind] = ValueKind.BOOL

    value: bool = Field(strict=True)


class _Integer(_Scalar):
    """Shared behaviour of Int and UInt.

    The two variants compare and hash by numeric value: the wire format does
    not record which variant produced a non-negative integer, so ``UInt(5)``
    decodes as ``Int(5)`` and the two must be equal.
    """

    value: int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _Integer):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


class Int(_Integer):
    """Signed 64-bit integer."""

    kind: ClassVar[ValueKind] = ValueKind.INT

    value: int = Field(strict=True, ge=INT64_MIN, le=INT64_MAX)


class UInt(_Integer):
    """Unsigned 64-bit integer, needed for values above 2**63 - 1."""

    kind: ClassVar[ValueKind] = ValueKind.UINT

    value: int = Field(strict=True, ge=0, le=UINT64_MAX)


class _Float(_Scalar):
    """Shared behaviour of Float32 and Float64.

    Two NaN payloads compare equal so a decoded NaN matches the value that
    was encoded. The two widths never compare equal to each other.
    """

    value: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Float):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return self.value == other.value or (math.isnan(self.value) and math.isnan(other.value))

    def __hash__(self) -> int:
        if math.isnan(self.value):
            return hash((self.kind, "nan"))
        return hash((self.kind, self.value))


class Float32(_Float):
    """Single-precision float.

    The payload is rounded to the nearest binary32 value on construction, so
    the stored number is exactly what goes on the wire.
    """

    kind: ClassVar[ValueKind] = ValueKind.FLOAT32

    value: float = Field(strict=True)

    @field_validator("value")
    @classmethod
    def _round_to_binary32(cls, value: float) -> float:
        try:
            return _F32.unpack(_F32.pack(value))[0]
        except (OverflowError, struct.error) as err:
            raise ValueError(f"{value} is out of range for a 32-bit float") from err


class Float64(_Float):
    """Double-precision float."""

    kind: ClassVar[ValueKind] = ValueKind.FLOAT64

    value: float = Field(strict=True)


class Str(_Scalar):
    """Unicode text, encoded as UTF-8 on the wire."""

    kind: ClassVar[ValueKind] = ValueKind.STR

    value: str = Field(strict=True)


class Bin(_Scalar):
    """Raw byte sequence."""

    kind: ClassVar[ValueKind] = ValueKind.BIN

    value: bytes = Field(strict=True)

    @field_validator("value", mode="before")
    @classmethod
    def _freeze_buffer(cls, value: Any) -> Any:
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value


def _require_values(items: Any, where: str) -> None:
    for item in items:
        if not isinstance(item, Value):
            raise ValueError(
                f"{where} must be Value instances, got {type(item).__name__}; "
                f"use to_value() for native data"
            )


class Array(Value):
    """Ordered sequence of values."""

    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    items: tuple[Value, ...] = ()

    def __init__(self, *args: Any, **data: Any) -> None:
        if args:
            if len(args) > 1 or "items" in data:
                raise TypeError("Array takes a single sequence of items")
            data["items"] = args[0]
        super().__init__(**data)

    @field_validator("items", mode="before")
    @classmethod
    def _check_items(cls, items: Any) -> Any:
        if isinstance(items, (list, tuple)):
            _require_values(items, "Array items")
        return items

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_native(self) -> list[Any]:
        return [item.to_native() for item in self.items]


class Map(Value):
    """String-keyed mapping that keeps its insertion order.

    Keys must be unique ``str`` objects. The entries can be given as a dict
    or as a sequence of ``(key, value)`` pairs.
    """

    kind: ClassVar[ValueKind] = ValueKind.MAP

    entries: tuple[tuple[StrictStr, Value], ...] = ()

    def __init__(self, *args: Any, **data: Any) -> None:
        if args:
            if len(args) > 1 or "entries" in data:
                raise TypeError("Map takes a single mapping or sequence of pairs")
            data["entries"] = args[0]
        super().__init__(**data)

    @field_validator("entries", mode="before")
    @classmethod
    def _coerce_entries(cls, entries: Any) -> Any:
        if isinstance(entries, Mapping):
            entries = list(entries.items())
        if isinstance(entries, (list, tuple)):
            for pair in entries:
                if isinstance(pair, (list, tuple)) and len(pair) == 2:
                    _require_values(pair[1:], "Map values")
        return entries

    @field_validator("entries")
    @classmethod
    def _check_unique_keys(cls, entries: tuple[tuple[str, Value], ...]) -> tuple[tuple[str, Value], ...]:
        seen: set[str] = set()
        for key, _ in entries:
            if key in seen:
                raise ValueError(f"duplicate map key {key!r}")
            seen.add(key)
        return entries

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: str) -> Value:
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        raise KeyError(key)

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def to_native(self) -> dict[str, Any]:
        return {key: value.to_native() for key, value in self.entries}
