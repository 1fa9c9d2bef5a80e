"""Encoded size calculation utilities.

This module provides functions to calculate the encoded size of a value
without actually encoding it.
"""

from __future__ import annotations

from typing import Any

from ..codec import tags
from ..config import MAX_WIRE_LENGTH
from ..exceptions import UnsupportedValueError, ValueTooLargeError
from ..models.base import Value, ValueKind
from ..models.native import to_value


def encoded_size(value: Value | Any) -> int:
    """Calculate the encoded size of a value in bytes.

    Native Python data is converted with to_value() first. The result always
    equals ``len(encode(value))``.

    Args:
        value: Value tree or native data

    Returns:
        Size in bytes

    Raises:
        EncodeError: If the value could not be encoded

    Example:
        >>> encoded_size(Int(127))
        1
        >>> encoded_size({"a": 1, "b": [-1, "x"]})
        10
    """
    if not isinstance(value, Value):
        value = to_value(value)
    return _size(value)


def int_size(number: int) -> int:
    """Return the encoded size of an integer, marker included.

    Example:
        >>> [int_size(n) for n in (127, 128, -32, -33, 2**32)]
        [1, 2, 1, 2, 9]
    """
    if number >= 0:
        if number <= tags.POSITIVE_FIXINT_MAX:
            return 1
        for width in (1, 2, 4, 8):
            if number < 1 << (8 * width):
                return 1 + width
    else:
        if number >= tags.NEGATIVE_FIXINT_MIN:
            return 1
        for width in (1, 2, 4, 8):
            if number >= -(1 << (8 * width - 1)):
                return 1 + width
    raise ValueTooLargeError(f"integer {number} does not fit in 64 bits")


def header_size(count: int, fixed_limit: int = 0, has_8bit: bool = True) -> int:
    """Return the size of a marker plus length field for a count or byte length.

    Args:
        count: Element count or byte length
        fixed_limit: Exclusive limit of the fixed form (0 if there is none)
        has_8bit: Whether the family has an 8-bit length form
    """
    if count < fixed_limit:
        return 1
    if has_8bit and count <= 0xFF:
        return 2
    if count <= 0xFFFF:
        return 3
    if count <= MAX_WIRE_LENGTH:
        return 5
    raise ValueTooLargeError(f"length {count} exceeds {MAX_WIRE_LENGTH}")


def _str_size(text: str) -> int:
    try:
        length = len(text.encode("utf-8"))
    except UnicodeEncodeError as err:
        raise UnsupportedValueError(f"string is not encodable as UTF-8: {err}") from err
    return header_size(length, tags.FIXSTR_LIMIT) + length


def _size(value: Value) -> int:
    kind = getattr(type(value), "kind", None)

    if kind is ValueKind.NULL or kind is ValueKind.BOOL:
        return 1
    if kind is ValueKind.INT or kind is ValueKind.UINT:
        return int_size(value.value)  # type: ignore[attr-defined]
    if kind is ValueKind.FLOAT32:
        return 5
    if kind is ValueKind.FLOAT64:
        return 9
    if kind is ValueKind.STR:
        return _str_size(value.value)  # type: ignore[attr-defined]
    if kind is ValueKind.BIN:
        length = len(value.value)  # type: ignore[attr-defined]
        return header_size(length) + length
    if kind is ValueKind.ARRAY:
        items = value.items  # type: ignore[attr-defined]
        return header_size(len(items), tags.FIXARRAY_LIMIT, has_8bit=False) + sum(
            _size(item) for item in items
        )
    if kind is ValueKind.MAP:
        entries = value.entries  # type: ignore[attr-defined]
        return header_size(len(entries), tags.FIXMAP_LIMIT, has_8bit=False) + sum(
            _str_size(key) + _size(item) for key, item in entries
        )

    raise UnsupportedValueError(f"cannot size {type(value).__name__}")
