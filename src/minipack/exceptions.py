"""Exception hierarchy for minipack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from MinipackError for easy catching of any minipack-specific error.
"""

from __future__ import annotations


class MinipackError(Exception):
    """Base exception for all minipack errors."""

    pass


class EncodeError(MinipackError):
    """Raised when encoding a value fails.

    Nothing is written to the destination when this is raised.
    """

    pass


class DecodeError(MinipackError):
    """Raised when decoding binary data fails.

    Attributes:
        offset: Absolute byte offset where the problem was detected, if known
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)
        self.offset = offset


class ValueTooLargeError(EncodeError):
    """Raised when a count, length or integer exceeds the widest wire form.

    Examples:
        - String longer than 4294967295 UTF-8 bytes
        - Array with more than 4294967295 elements
        - Native int outside the i64/u64 range
    """

    pass


class UnsupportedValueError(EncodeError):
    """Raised when an object outside the closed value model reaches the encoder."""

    pass


class TruncatedInputError(DecodeError):
    """Raised when the input ends before the declared or implied payload."""

    pass


class MalformedTagError(DecodeError):
    """Raised for the reserved marker 0xC1 and for extension markers."""

    pass


class LengthExceededError(DecodeError):
    """Raised when a declared count or length is above the configured ceiling."""

    pass


class InvalidUtf8Error(DecodeError):
    """Raised when a string payload is not valid UTF-8."""

    pass


class InvalidMapKeyError(EncodeError, DecodeError):
    """Raised when a map key is not a string or is repeated.

    Raised on both paths: the encoder rejects the map before writing its
    header, the decoder rejects a key that does not decode to a string.
    """

    pass


class DepthExceededError(EncodeError, DecodeError):
    """Raised when array/map nesting goes deeper than the configured limit."""

    pass
