"""Value model for minipack.

This module provides the closed set of value variants the codec carries and
the conversion from plain Python data.
"""

from __future__ import annotations

from .base import Value, ValueKind
from .native import to_value
from .values import (
    INT64_MAX,
    INT64_MIN,
    UINT64_MAX,
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
)

__all__ = [
    "Value",
    "ValueKind",
    "Null",
    "Bool",
    "Int",
    "UInt",
    "Float32",
    "Float64",
    "Str",
    "Bin",
    "Array",
    "Map",
    "to_value",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
]
