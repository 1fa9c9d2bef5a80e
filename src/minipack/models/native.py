"""Conversion from plain Python data to the value model.

``to_value()`` is what ``pack()`` runs before encoding. The mapping is:

    None                         -> Null
    bool                         -> Bool
    int                          -> Int, or UInt above 2**63 - 1
    float                        -> Float64
    str                          -> Str
    bytes, bytearray, memoryview -> Bin
    list, tuple                  -> Array
    dict                         -> Map (keys must be str)
    Value                        -> unchanged
"""

from __future__ import annotations

from typing import Any

from ..config import DEFAULT_MAX_DEPTH
from ..exceptions import (
    DepthExceededError,
    InvalidMapKeyError,
    UnsupportedValueError,
    ValueTooLargeError,
)
from .base import Value
from .values import (
    INT64_MAX,
    INT64_MIN,
    UINT64_MAX,
    Array,
    Bin,
    Bool,
    Float64,
    Int,
    Map,
    Null,
    Str,
    UInt,
)


def to_value(obj: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Convert native Python data to a Value tree.

    Args:
        obj: Object to convert
        max_depth: Maximum list/dict nesting

    Returns:
        Equivalent Value

    Raises:
        InvalidMapKeyError: If a dict has a non-string key
        ValueTooLargeError: If an int is outside the i64/u64 range
        UnsupportedValueError: If an object has no counterpart in the model
        DepthExceededError: If nesting is deeper than max_depth

    Example:
        >>> to_value({"a": 1, "b": [-1, "x"]})
        Map(entries=(('a', Int(value=1)), ('b', Array(items=(Int(value=-1), Str(value='x'))))))
    """
    return _convert(obj, 0, max_depth)


def _convert(obj: Any, depth: int, max_depth: int) -> Value:
    if isinstance(obj, Value):
        return obj

    if obj is None:
        return Null()

    # bool must be checked before int: isinstance(True, int) is True
    if isinstance(obj, bool):
        return Bool(obj)

    if isinstance(obj, int):
        if INT64_MIN <= obj <= INT64_MAX:
            return Int(int(obj))
        if 0 <= obj <= UINT64_MAX:
            return UInt(int(obj))
        raise ValueTooLargeError(f"integer {obj} does not fit in 64 bits")

    if isinstance(obj, float):
        return Float64(float(obj))

    if isinstance(obj, str):
        return Str(str(obj))

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Bin(bytes(obj))

    if isinstance(obj, (list, tuple)):
        _enter(depth, max_depth)
        return Array([_convert(item, depth + 1, max_depth) for item in obj])

    if isinstance(obj, dict):
        _enter(depth, max_depth)
        entries = []
        for key, item in obj.items():
            if not isinstance(key, str):
                raise InvalidMapKeyError(
                    f"map keys must be str, got {type(key).__name__} key {key!r}"
                )
            entries.append((str(key), _convert(item, depth + 1, max_depth)))
        return Map(entries)

    raise UnsupportedValueError(f"cannot convert {type(obj).__name__} to a minipack value")


def _enter(depth: int, max_depth: int) -> None:
    if depth + 1 > max_depth:
        raise DepthExceededError(f"nesting deeper than max_depth={max_depth}")
