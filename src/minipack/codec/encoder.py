"""MessagePack encoder for minipack values.

This module provides the encode() function that converts a Value tree to
MessagePack bytes, always choosing the narrowest marker that represents each
value exactly.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

from ..config import MAX_WIRE_LENGTH, EncoderConfig
from ..exceptions import (
    DepthExceededError,
    InvalidMapKeyError,
    UnsupportedValueError,
    ValueTooLargeError,
)
from ..models.base import Value, ValueKind
from ..models.native import to_value
from ..models.values import INT64_MIN, UINT64_MAX
from . import tags
from .buffer import ByteWriter

log = logging.getLogger(__name__)


class Encoder:
    """Encodes Value trees to MessagePack.

    An encoder owns a scratch buffer that is reused between calls, so one
    instance must not be used from several threads at once. The module-level
    ``encode()`` creates a fresh encoder per call.

    Example:
        >>> encoder = Encoder()
        >>> encoder.encode(Int(128))
        b'\\xcc\\x80'
    """

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self.config = config or EncoderConfig()
        self._writer = ByteWriter()

    def encode(self, value: Value) -> bytes:
        """Encode one value.

        The whole value is assembled before anything is returned, so a
        failure part way through never yields partial output.

        Raises:
            InvalidMapKeyError: If a map key is not a string or is repeated
            ValueTooLargeError: If a count, length or integer exceeds the wire limits
            UnsupportedValueError: If the tree contains an object outside the model
            DepthExceededError: If nesting is deeper than config.max_depth
        """
        self._writer.clear()
        try:
            self._encode_value(value, 0)
            return self._writer.to_bytes()
        except RecursionError as err:
            raise DepthExceededError(
                f"nesting exhausted the interpreter stack before max_depth={self.config.max_depth}"
            ) from err
        finally:
            self._writer.clear()

    def encode_into(self, value: Value, stream: BinaryIO) -> int:
        """Encode one value and write it to a binary stream.

        Returns:
            Number of bytes written
        """
        data = self.encode(value)
        stream.write(data)
        return len(data)

    def _encode_value(self, value: Any, depth: int) -> None:
        if not isinstance(value, Value) or not hasattr(type(value), "kind"):
            raise UnsupportedValueError(
                f"cannot encode {type(value).__name__}; expected a Value variant"
            )

        kind = value.kind
        writer = self._writer

        if kind is ValueKind.NULL:
            writer.write_marker(tags.NIL)
            return

        if kind is ValueKind.BOOL:
            flag = _payload(value, bool)
            writer.write_marker(tags.TRUE if flag else tags.FALSE)
            return

        if kind is ValueKind.INT or kind is ValueKind.UINT:
            self._encode_int(_payload(value, int))
            return

        # Provenance decides the width; a Float64 is never narrowed
        if kind is ValueKind.FLOAT32:
            number = _payload(value, float)
            writer.write_marker(tags.FLOAT_32)
            try:
                writer.write_float32(number)
            except ValueError as err:
                raise ValueTooLargeError(str(err)) from err
            return

        if kind is ValueKind.FLOAT64:
            writer.write_marker(tags.FLOAT_64)
            writer.write_float64(_payload(value, float))
            return

        if kind is ValueKind.STR:
            self._encode_str(_payload(value, str))
            return

        if kind is ValueKind.BIN:
            raw = _payload(value, bytes)
            self._write_header(len(raw), "binary", None, 0, tags.BIN_8, tags.BIN_16, tags.BIN_32)
            writer.write_bytes(raw)
            return

        if kind is ValueKind.ARRAY:
            self._encode_array(value, depth)
            return

        if kind is ValueKind.MAP:
            self._encode_map(value, depth)
            return

        raise UnsupportedValueError(f"no encoding for value kind {kind!r}")

    def _encode_int(self, value: int) -> None:
        writer = self._writer

        # Non-negative values need no sign bit: unsigned ladder
        if value >= 0:
            if value <= tags.POSITIVE_FIXINT_MAX:
                writer.write_marker(value)
            elif value <= 0xFF:
                writer.write_marker(tags.UINT_8)
                writer.write_uint(value, 1)
            elif value <= 0xFFFF:
                writer.write_marker(tags.UINT_16)
                writer.write_uint(value, 2)
            elif value <= 0xFFFFFFFF:
                writer.write_marker(tags.UINT_32)
                writer.write_uint(value, 4)
            elif value <= UINT64_MAX:
                writer.write_marker(tags.UINT_64)
                writer.write_uint(value, 8)
            else:
                raise ValueTooLargeError(f"integer {value} does not fit in 64 bits")
            return

        if value >= tags.NEGATIVE_FIXINT_MIN:
            writer.write_marker(value & 0xFF)
        elif value >= -0x80:
            writer.write_marker(tags.INT_8)
            writer.write_int(value, 1)
        elif value >= -0x8000:
            writer.write_marker(tags.INT_16)
            writer.write_int(value, 2)
        elif value >= -0x80000000:
            writer.write_marker(tags.INT_32)
            writer.write_int(value, 4)
        elif value >= INT64_MIN:
            writer.write_marker(tags.INT_64)
            writer.write_int(value, 8)
        else:
            raise ValueTooLargeError(f"integer {value} does not fit in 64 bits")

    def _encode_array(self, value: Any, depth: int) -> None:
        self._enter(depth)
        items = value.items
        self._write_header(
            len(items), "array", tags.FIXARRAY, tags.FIXARRAY_LIMIT, None, tags.ARRAY_16, tags.ARRAY_32
        )
        for item in items:
            self._encode_value(item, depth + 1)

    def _encode_map(self, value: Any, depth: int) -> None:
        self._enter(depth)
        entries = value.entries
        count = len(entries)
        if count > MAX_WIRE_LENGTH:
            raise ValueTooLargeError(f"map of {count} entries exceeds {MAX_WIRE_LENGTH}")

        # Keys are checked before the header so a bad map writes nothing
        pairs = list(entries)
        seen: set[str] = set()
        for pair in pairs:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise UnsupportedValueError(f"map entries must be (key, value) pairs, got {pair!r}")
            key = pair[0]
            if not isinstance(key, str):
                raise InvalidMapKeyError(
                    f"map keys must be str, got {type(key).__name__} key {key!r}"
                )
            if key in seen:
                raise InvalidMapKeyError(f"duplicate map key {key!r}")
            seen.add(key)

        self._write_header(count, "map", tags.FIXMAP, tags.FIXMAP_LIMIT, None, tags.MAP_16, tags.MAP_32)
        for key, item in pairs:
            self._encode_str(key)
            self._encode_value(item, depth + 1)

    def _encode_str(self, text: str) -> None:
        # Length ladder is by UTF-8 byte count, not character count
        try:
            raw = text.encode("utf-8")
        except UnicodeEncodeError as err:
            raise UnsupportedValueError(f"string is not encodable as UTF-8: {err}") from err
        self._write_header(
            len(raw), "string", tags.FIXSTR, tags.FIXSTR_LIMIT, tags.STR_8, tags.STR_16, tags.STR_32
        )
        self._writer.write_bytes(raw)

    def _write_header(
        self,
        count: int,
        what: str,
        fixed: int | None,
        fixed_limit: int,
        marker_8: int | None,
        marker_16: int,
        marker_32: int,
    ) -> None:
        """Write the narrowest marker and length field for a count or byte length."""
        if count > MAX_WIRE_LENGTH:
            raise ValueTooLargeError(f"{what} of length {count} exceeds {MAX_WIRE_LENGTH}")

        writer = self._writer
        if fixed is not None and count < fixed_limit:
            writer.write_marker(fixed | count)
        elif marker_8 is not None and count <= 0xFF:
            writer.write_marker(marker_8)
            writer.write_uint(count, 1)
        elif count <= 0xFFFF:
            writer.write_marker(marker_16)
            writer.write_uint(count, 2)
        else:
            writer.write_marker(marker_32)
            writer.write_uint(count, 4)

    def _enter(self, depth: int) -> None:
        if depth + 1 > self.config.max_depth:
            raise DepthExceededError(f"nesting deeper than max_depth={self.config.max_depth}")


def _payload(value: Any, expected: type) -> Any:
    """Return value.value after checking it survived any validation bypass."""
    payload = getattr(value, "value", None)
    ok = isinstance(payload, expected)
    if expected is int:
        ok = ok and not isinstance(payload, bool)
    elif expected is float:
        ok = isinstance(payload, (int, float)) and not isinstance(payload, bool)
    if not ok:
        raise UnsupportedValueError(
            f"{type(value).__name__} payload must be {expected.__name__}, "
            f"got {type(payload).__name__}"
        )
    return payload


def encode(value: Value, config: EncoderConfig | None = None) -> bytes:
    """Encode a Value to MessagePack bytes.

    Args:
        value: Value tree to encode
        config: Optional encoder limits

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the value cannot be encoded (see Encoder.encode)

    Examples:
        ```python
        from minipack import Array, Int, Map, Str, encode

        data = encode(Map({"a": Int(1), "b": Array([Int(-1), Str("x")])}))
        assert data == bytes.fromhex("82 a1 61 01 a1 62 92 ff a1 78")
        ```
    """
    data = Encoder(config).encode(value)
    log.debug("encoded %s into %d bytes", type(value).__name__, len(data))
    return data


def encode_into(value: Value, stream: BinaryIO, config: EncoderConfig | None = None) -> int:
    """Encode a Value and write it to a binary stream.

    Nothing is written if encoding fails.

    Returns:
        Number of bytes written
    """
    return Encoder(config).encode_into(value, stream)


def pack(obj: Any, config: EncoderConfig | None = None) -> bytes:
    """Convert native Python data with to_value() and encode it.

    Examples:
        ```python
        from minipack import pack

        pack({"depth": 12.5, "ids": [1, 2, 3]})
        ```
    """
    config = config or EncoderConfig()
    return Encoder(config).encode(to_value(obj, max_depth=config.max_depth))
