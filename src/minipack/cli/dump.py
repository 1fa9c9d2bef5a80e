"""Dump CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.decoder import iter_decode
from ..codec.tags import lookup
from ..config import DecoderConfig
from ..models.base import Value, ValueKind


def dump_file(file_path: Path, config: DecoderConfig | None = None) -> None:
    """Decode every value in a file and print an annotated outline.

    Args:
        file_path: Path to a file of one or more concatenated MessagePack values
        config: Decoder limits
    """
    data = file_path.read_bytes()

    print("|" * 7, "minipack: MessagePack Codec", "|" * 7)
    print(f"{file_path} ({len(data)} bytes)")
    print()

    count = 0
    for offset, value, consumed in iter_decode(data, config):
        count += 1
        tag = lookup(data[offset])
        print(f"{'=' * 19} value {count} @ {offset} {'=' * 19}")
        print(f"marker 0x{tag.marker:02x} ({tag.name}), {consumed} bytes")
        for line in format_value(value):
            print(f"    {line}")
        print()

    print(f"{count} value{'s' if count != 1 else ''} decoded.")


def format_value(value: Value, indent: int = 0) -> list[str]:
    """Render a value tree as indented lines.

    Example:
        >>> format_value(Array([Int(1), Str("x")]))
        ['array[2]', '  int 1', "  str 'x'"]
    """
    pad = "  " * indent
    kind = value.kind

    if kind is ValueKind.ARRAY:
        lines = [f"{pad}array[{len(value.items)}]"]  # type: ignore[attr-defined]
        for item in value.items:  # type: ignore[attr-defined]
            lines.extend(format_value(item, indent + 1))
        return lines

    if kind is ValueKind.MAP:
        lines = [f"{pad}map[{len(value.entries)}]"]  # type: ignore[attr-defined]
        for key, item in value.entries:  # type: ignore[attr-defined]
            nested = format_value(item, indent + 1)
            lines.append(f"{pad}  {key!r}: {nested[0].lstrip()}")
            lines.extend(nested[1:])
        return lines

    if kind is ValueKind.NULL:
        return [f"{pad}nil"]

    return [f"{pad}{kind.value} {value.to_native()!r}"]
