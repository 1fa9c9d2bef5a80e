"""Byte-level packing and unpacking utilities.

This module provides the low-level readers and writers the codec is built on.
All multi-byte numeric fields are big-endian on the wire regardless of the
host byte order; ``struct`` formats with an explicit ``>`` do the swapping.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from ..exceptions import TruncatedInputError

_UINT = {
    1: struct.Struct(">B"),
    2: struct.Struct(">H"),
    4: struct.Struct(">I"),
    8: struct.Struct(">Q"),
}
_INT = {
    1: struct.Struct(">b"),
    2: struct.Struct(">h"),
    4: struct.Struct(">i"),
    8: struct.Struct(">q"),
}
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")

# Upper bound for a single stream read, so a large declared length does not
# allocate the whole payload before the source proves it has the bytes.
_STREAM_CHUNK = 64 * 1024


class ByteWriter:
    """Accumulates encoded bytes in an internal scratch buffer.

    The buffer is reused across calls after ``clear()``, which makes a
    writer (and the encoder that owns it) unsafe to share between threads.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_marker(0xCD)
        >>> writer.write_uint(1000, 2)
        >>> writer.to_bytes()
        b'\\xcd\\x03\\xe8'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buf = bytearray()

    def write_marker(self, marker: int) -> None:
        """Write a single marker byte."""
        self._buf.append(marker)

    def write_uint(self, value: int, width: int) -> None:
        """Write an unsigned big-endian integer of 1, 2, 4 or 8 bytes.

        Raises:
            ValueError: If width is not supported or value doesn't fit
        """
        packer = _UINT.get(width)
        if packer is None:
            raise ValueError(f"width must be 1, 2, 4 or 8, got {width}")
        try:
            self._buf += packer.pack(value)
        except struct.error as err:
            raise ValueError(f"Value {value} doesn't fit in {width} unsigned bytes") from err

    def write_int(self, value: int, width: int) -> None:
        """Write a two's complement big-endian integer of 1, 2, 4 or 8 bytes.

        Raises:
            ValueError: If width is not supported or value doesn't fit
        """
        packer = _INT.get(width)
        if packer is None:
            raise ValueError(f"width must be 1, 2, 4 or 8, got {width}")
        try:
            self._buf += packer.pack(value)
        except struct.error as err:
            raise ValueError(f"Value {value} doesn't fit in {width} signed bytes") from err

    def write_float32(self, value: float) -> None:
        """Write an IEEE-754 binary32 value.

        Raises:
            ValueError: If value is outside the binary32 range
        """
        try:
            self._buf += _FLOAT32.pack(value)
        except (OverflowError, struct.error) as err:
            raise ValueError(f"Value {value} is out of range for a 32-bit float") from err

    def write_float64(self, value: float) -> None:
        """Write an IEEE-754 binary64 value."""
        self._buf += _FLOAT64.pack(value)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buf += data

    def byte_length(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buf)

    def to_bytes(self) -> bytes:
        """Return a copy of the buffer contents."""
        return bytes(self._buf)

    def clear(self) -> None:
        """Discard the buffer contents, keeping the allocation."""
        del self._buf[:]


class _Reader:
    """Numeric helpers shared by the buffer and stream readers."""

    def read_exact(self, count: int) -> bytes:  # pragma: no cover - abstract
        raise NotImplementedError

    @property
    def position(self) -> int:  # pragma: no cover - abstract
        raise NotImplementedError

    def read_byte(self) -> int:
        """Read a single byte as an int."""
        return self.read_exact(1)[0]

    def read_uint(self, width: int) -> int:
        """Read an unsigned big-endian integer of 1, 2, 4 or 8 bytes."""
        return _UINT[width].unpack(self.read_exact(width))[0]

    def read_int(self, width: int) -> int:
        """Read a two's complement big-endian integer of 1, 2, 4 or 8 bytes."""
        return _INT[width].unpack(self.read_exact(width))[0]

    def read_float32(self) -> float:
        """Read an IEEE-754 binary32 value."""
        return _FLOAT32.unpack(self.read_exact(4))[0]

    def read_float64(self) -> float:
        """Read an IEEE-754 binary64 value."""
        return _FLOAT64.unpack(self.read_exact(8))[0]


class ByteReader(_Reader):
    """Reads from a window of an in-memory buffer.

    Example:
        >>> reader = ByteReader(b"\\x00\\xcd\\x03\\xe8", offset=1)
        >>> reader.read_byte()
        205
        >>> reader.read_uint(2)
        1000
        >>> reader.consumed
        3
    """

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0, size: int | None = None) -> None:
        """Initialize a reader over ``data[offset:offset + size]``.

        Args:
            data: Buffer to read from
            offset: Index of the first byte to read
            size: Number of bytes available from offset (default: to the end)

        Raises:
            ValueError: If the window falls outside the buffer
        """
        view = memoryview(data).cast("B")
        end = len(view) if size is None else offset + size
        if offset < 0 or offset > len(view) or (size is not None and size < 0) or end > len(view):
            raise ValueError(
                f"window offset={offset} size={size} is outside a buffer of {len(view)} bytes"
            )
        self._view = view
        self._start = offset
        self._end = end
        self._pos = offset

    @property
    def position(self) -> int:
        """Absolute index of the next byte to read."""
        return self._pos

    @property
    def consumed(self) -> int:
        """Number of bytes read since the start of the window."""
        return self._pos - self._start

    def remaining(self) -> int:
        """Number of unread bytes in the window."""
        return self._end - self._pos

    def read_exact(self, count: int) -> bytes:
        """Read exactly ``count`` bytes.

        Raises:
            TruncatedInputError: If fewer than count bytes remain
        """
        if self._pos + count > self._end:
            raise TruncatedInputError(
                f"Truncated input: need {count} bytes, have {self._end - self._pos}",
                offset=self._pos,
            )
        chunk = self._view[self._pos : self._pos + count].tobytes()
        self._pos += count
        return chunk


class StreamReader(_Reader):
    """Reads from a binary file-like object.

    Only the bytes belonging to the decoded value are consumed, so several
    values can be read back to back from the same stream.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pos = 0

    @property
    def position(self) -> int:
        """Number of bytes read from the stream so far."""
        return self._pos

    @property
    def consumed(self) -> int:
        return self._pos

    def read_exact(self, count: int) -> bytes:
        """Read exactly ``count`` bytes.

        Raises:
            TruncatedInputError: If the stream ends first
        """
        parts = []
        needed = count
        while needed > 0:
            chunk = self._stream.read(min(needed, _STREAM_CHUNK))
            if not chunk:
                raise TruncatedInputError(
                    f"Truncated input: need {count} bytes, stream ended after {count - needed}",
                    offset=self._pos,
                )
            parts.append(chunk)
            needed -= len(chunk)
        self._pos += count
        return b"".join(parts)
