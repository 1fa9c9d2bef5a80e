"""Configuration for the encoder and decoder.

Both codecs walk nested arrays and maps recursively, so every instance
carries explicit ceilings. The defaults are safe for untrusted input;
raise them only for data you produced yourself.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 256
DEFAULT_MAX_LENGTH = 64 * 1024 * 1024

# Largest count or byte length any wire form can carry (32-bit field)
MAX_WIRE_LENGTH = 0xFFFFFFFF


@dataclass(frozen=True)
class EncoderConfig:
    """Configuration for encoding.

    Attributes:
        max_depth: Maximum array/map nesting (default 256). The top-level
            value is depth 0; every array or map entered adds one.

    Examples:
        ```python
        from minipack import Encoder, EncoderConfig

        encoder = Encoder(EncoderConfig(max_depth=16))
        ```
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")


@dataclass(frozen=True)
class DecoderConfig:
    """Configuration for decoding.

    Attributes:
        max_depth: Maximum array/map nesting (default 256)
        max_length: Ceiling for any declared string/binary byte length or
            array/map element count (default 64 MiB). Checked before the
            payload is read, so a hostile length prefix never allocates.
        lenient_keys: If True, map keys that decode to a non-string value are
            stringified instead of raising InvalidMapKeyError (default False).
            Use only when talking to producers that emit integer keys.

    Examples:
        ```python
        from minipack import Decoder, DecoderConfig

        # Small embedded messages from an untrusted peer
        config = DecoderConfig(max_depth=8, max_length=4096)
        value, consumed = Decoder(config).decode(data)
        ```
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_length: int = DEFAULT_MAX_LENGTH
    lenient_keys: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

        if not 0 <= self.max_length <= MAX_WIRE_LENGTH:
            raise ValueError(
                f"max_length must be 0-{MAX_WIRE_LENGTH}, got {self.max_length}"
            )
