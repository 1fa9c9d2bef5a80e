"""minipack: compact MessagePack codec

A Python library that converts a closed, dynamically-typed value model to
and from the MessagePack binary format, always choosing the narrowest wire
representation for each value.

Inspired by: https://github.com/shogo82148/MiniMessagePack

Key Features:
- Pydantic-based immutable value model with a distinct unsigned 64-bit variant
- Minimal-width integer, string, binary, array and map headers
- 32-bit and 64-bit floats kept apart on the wire
- Strict string map keys on both encode and decode
- Configurable depth and length ceilings for untrusted input

Quick Start:
    >>> from minipack import Array, Int, Map, Str, decode, encode
    >>>
    >>> value = Map({"a": Int(1), "b": Array([Int(-1), Str("x")])})
    >>> data = encode(value)
    >>> data.hex()
    '82a16101a16292ffa178'
    >>> decode(data) == (value, len(data))
    True

Native Python data goes through pack()/unpack():
    >>> from minipack import pack, unpack
    >>> unpack(pack({"depth": 12.5, "ids": [1, 2, 3]}))
    {'depth': 12.5, 'ids': [1, 2, 3]}
"""

from __future__ import annotations

from .codec import (
    Decoder,
    Encoder,
    decode,
    decode_from,
    encode,
    encode_into,
    iter_decode,
    pack,
    unpack,
)
from .config import DecoderConfig, EncoderConfig
from .exceptions import (
    DecodeError,
    DepthExceededError,
    EncodeError,
    InvalidMapKeyError,
    InvalidUtf8Error,
    LengthExceededError,
    MalformedTagError,
    MinipackError,
    TruncatedInputError,
    UnsupportedValueError,
    ValueTooLargeError,
)
from .models import (
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
    to_value,
)
from .utils import encoded_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "encode_into",
    "decode",
    "decode_from",
    "iter_decode",
    "pack",
    "unpack",
    "Encoder",
    "Decoder",
    # Configuration
    "EncoderConfig",
    "DecoderConfig",
    # Value model
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
    # Exceptions
    "MinipackError",
    "EncodeError",
    "DecodeError",
    "InvalidMapKeyError",
    "ValueTooLargeError",
    "UnsupportedValueError",
    "TruncatedInputError",
    "MalformedTagError",
    "DepthExceededError",
    "LengthExceededError",
    "InvalidUtf8Error",
    # Sizing
    "encoded_size",
    # Version
    "__version__",
]
