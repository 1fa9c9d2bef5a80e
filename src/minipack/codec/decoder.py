"""MessagePack decoder for minipack values.

This module provides the decode() function that converts MessagePack bytes
back to a Value tree and reports how many bytes the value occupied, so a
caller can walk a buffer of concatenated values.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Iterator

from ..config import DecoderConfig
from ..exceptions import (
    DecodeError,
    DepthExceededError,
    InvalidMapKeyError,
    InvalidUtf8Error,
    LengthExceededError,
    MalformedTagError,
)
from ..models.base import Value
from ..models.values import INT64_MAX, Array, Bin, Bool, Float32, Float64, Int, Map, Null, Str, UInt
from .buffer import ByteReader, StreamReader, _Reader
from .tags import Family, lookup

log = logging.getLogger(__name__)


class Decoder:
    """Decodes MessagePack into Value trees.

    A decoder is stateless between calls apart from its configuration; the
    reader it works on is created per call.

    Example:
        >>> value, consumed = Decoder().decode(b"\\x92\\xff\\xa1x")
        >>> value
        Array(items=(Int(value=-1), Str(value='x')))
        >>> consumed
        4
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()

    def decode(
        self, data: bytes | bytearray | memoryview, offset: int = 0, size: int | None = None
    ) -> tuple[Value, int]:
        """Decode the first value in ``data[offset:offset + size]``.

        Returns:
            Tuple of (value, number of bytes consumed from offset)

        Raises:
            TruncatedInputError: If the input ends inside the value
            MalformedTagError: If a reserved or extension marker is found
            InvalidMapKeyError: If a map key is not a string or is repeated
            LengthExceededError: If a declared length is above config.max_length
            DepthExceededError: If nesting is deeper than config.max_depth
            InvalidUtf8Error: If a string payload is not valid UTF-8
        """
        reader = ByteReader(data, offset, size)
        value = self._decode_root(reader)
        return value, reader.consumed

    def decode_from(self, stream: BinaryIO) -> tuple[Value, int]:
        """Decode one value from a binary stream, reading no further than its end.

        Returns:
            Tuple of (value, number of bytes read)
        """
        reader = StreamReader(stream)
        value = self._decode_root(reader)
        return value, reader.consumed

    def _decode_root(self, reader: _Reader) -> Value:
        try:
            return self._decode_value(reader, 0)
        except RecursionError as err:
            raise DepthExceededError(
                f"nesting exhausted the interpreter stack before max_depth={self.config.max_depth}",
                offset=reader.position,
            ) from err
        except DecodeError as err:
            log.debug("decode failed: %s", err)
            raise

    def _decode_value(self, reader: _Reader, depth: int) -> Value:
        start = reader.position
        tag = lookup(reader.read_byte())
        family = tag.family

        if family is Family.POSITIVE_FIXINT or family is Family.NEGATIVE_FIXINT:
            return Int(tag.embedded)

        if family is Family.FIXMAP:
            return self._decode_map(reader, tag.embedded, depth, start)

        if family is Family.FIXARRAY:
            return self._decode_array(reader, tag.embedded, depth, start)

        if family is Family.FIXSTR:
            return self._decode_str(reader, tag.embedded)

        if family is Family.NIL:
            return Null()

        if family is Family.FALSE:
            return Bool(False)

        if family is Family.TRUE:
            return Bool(True)

        if family is Family.UINT:
            number = reader.read_uint(tag.width)
            # Widen to Int whenever the value fits; UInt only needs the 64th bit
            return Int(number) if number <= INT64_MAX else UInt(number)

        if family is Family.INT:
            return Int(reader.read_int(tag.width))

        if family is Family.FLOAT32:
            return Float32(reader.read_float32())

        if family is Family.FLOAT64:
            return Float64(reader.read_float64())

        if family is Family.STR:
            length = self._read_length(reader, tag.width, "string")
            return self._decode_str(reader, length)

        if family is Family.BIN:
            length = self._read_length(reader, tag.width, "binary")
            return Bin(reader.read_exact(length))

        if family is Family.ARRAY:
            count = self._read_length(reader, tag.width, "array")
            return self._decode_array(reader, count, depth, start)

        if family is Family.MAP:
            count = self._read_length(reader, tag.width, "map")
            return self._decode_map(reader, count, depth, start)

        if family is Family.EXT:
            raise MalformedTagError(
                f"extension marker 0x{tag.marker:02x} ({tag.name}) is not supported", offset=start
            )

        raise MalformedTagError(f"reserved marker 0x{tag.marker:02x}", offset=start)

    def _read_length(self, reader: _Reader, width: int, what: str) -> int:
        position = reader.position
        length = reader.read_uint(width)
        if length > self.config.max_length:
            raise LengthExceededError(
                f"{what} declares length {length}, above max_length={self.config.max_length}",
                offset=position,
            )
        return length

    def _decode_str(self, reader: _Reader, length: int) -> Str:
        position = reader.position
        raw = reader.read_exact(length)
        try:
            return Str(raw.decode("utf-8"))
        except UnicodeDecodeError as err:
            raise InvalidUtf8Error(f"invalid UTF-8 in string: {err}", offset=position) from err

    def _decode_array(self, reader: _Reader, count: int, depth: int, start: int) -> Array:
        self._enter(depth, start)
        items: list[Value] = []
        for _ in range(count):
            items.append(self._decode_value(reader, depth + 1))
        return Array(items)

    def _decode_map(self, reader: _Reader, count: int, depth: int, start: int) -> Map:
        self._enter(depth, start)
        entries: list[tuple[str, Value]] = []
        seen: set[str] = set()
        for _ in range(count):
            key_offset = reader.position
            key = self._decode_key(self._decode_value(reader, depth + 1), key_offset)
            if key in seen:
                raise InvalidMapKeyError(f"duplicate map key {key!r}", offset=key_offset)
            seen.add(key)
            entries.append((key, self._decode_value(reader, depth + 1)))
        return Map(entries)

    def _decode_key(self, key: Value, offset: int) -> str:
        if isinstance(key, Str):
            return key.value
        if self.config.lenient_keys:
            return str(key.to_native())
        raise InvalidMapKeyError(
            f"map key must be a string, got {type(key).__name__}", offset=offset
        )

    def _enter(self, depth: int, offset: int) -> None:
        if depth + 1 > self.config.max_depth:
            raise DepthExceededError(
                f"nesting deeper than max_depth={self.config.max_depth}", offset=offset
            )


def decode(
    data: bytes | bytearray | memoryview,
    offset: int = 0,
    size: int | None = None,
    config: DecoderConfig | None = None,
) -> tuple[Value, int]:
    """Decode one MessagePack value.

    Args:
        data: Buffer holding the encoded value
        offset: Index of the value's marker byte
        size: Bytes available from offset (default: to the end of data)
        config: Optional decoder limits

    Returns:
        Tuple of (value, number of bytes consumed)

    Raises:
        DecodeError: If data is truncated, malformed or exceeds the limits

    Examples:
        ```python
        from minipack import decode

        value, consumed = decode(bytes.fromhex("82 a1 61 01 a1 62 92 ff a1 78"))
        assert consumed == 10
        assert value.to_native() == {"a": 1, "b": [-1, "x"]}
        ```
    """
    return Decoder(config).decode(data, offset, size)


def decode_from(stream: BinaryIO, config: DecoderConfig | None = None) -> tuple[Value, int]:
    """Decode one value from a binary stream.

    Returns:
        Tuple of (value, number of bytes read)
    """
    return Decoder(config).decode_from(stream)


def iter_decode(
    data: bytes | bytearray | memoryview, config: DecoderConfig | None = None
) -> Iterator[tuple[int, Value, int]]:
    """Decode every value in a buffer of concatenated values.

    Yields:
        Tuples of (offset, value, consumed) in buffer order

    Raises:
        DecodeError: On the first value that fails; earlier values have
            already been yielded
    """
    decoder = Decoder(config)
    offset = 0
    total = len(memoryview(data).cast("B"))
    while offset < total:
        value, consumed = decoder.decode(data, offset)
        yield offset, value, consumed
        offset += consumed


def unpack(data: bytes | bytearray | memoryview, config: DecoderConfig | None = None) -> Any:
    """Decode the first value in data and return it as plain Python data.

    Examples:
        ```python
        from minipack import pack, unpack

        assert unpack(pack({"ids": [1, 2, 3]})) == {"ids": [1, 2, 3]}
        ```
    """
    value, _ = Decoder(config).decode(data)
    return value.to_native()
