"""Base value class and minipack-specific Pydantic configuration.

This module provides the Value class that every variant of the value model
inherits from. The variant set is closed: the encoder and decoder dispatch
on ``kind`` and treat anything else as unsupported.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class ValueKind(enum.Enum):
    """Discriminator for the closed set of value variants."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STR = "str"
    BIN = "bin"
    ARRAY = "array"
    MAP = "map"


class Value(BaseModel):
    """Base class for all minipack values.

    Values are immutable once built. Construct one of the variants
    (``Null``, ``Bool``, ``Int``, ``UInt``, ``Float32``, ``Float64``, ``Str``,
    ``Bin``, ``Array``, ``Map``) or convert native Python data with
    ``to_value()``.

    Example:
        >>> from minipack import Array, Int, Map, Str
        >>> Map({"a": Int(1), "b": Array([Int(-1), Str("x")])})

    Attributes:
        kind: Variant discriminator, set by every concrete subclass
    """

    model_config = ConfigDict(
        # Values never change after construction
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    kind: ClassVar[ValueKind]

    @model_validator(mode="after")
    def _reject_bare_value(self) -> Value:
        if type(self) is Value:
            raise ValueError("Value is abstract; use one of its variants")
        return self

    def to_native(self) -> Any:
        """Return the plain Python equivalent of this value."""
        raise NotImplementedError(f"{type(self).__name__} has no native form")
