#!/usr/bin/env python3
"""Streaming example for minipack.

This example demonstrates:
1. Writing several values back to back into a file-like object
2. Walking the buffer with iter_decode()
3. Reading values one at a time from a stream with decode_from()
4. Rejecting hostile input with DecoderConfig limits
"""

from __future__ import annotations

import io

from minipack import DecodeError, DecoderConfig, decode, decode_from, iter_decode, pack


def main() -> None:
    """Run the streaming example."""
    print("=" * 60)
    print("minipack Streaming Example")
    print("=" * 60)
    print()

    # Write records
    print("1. Writing records...")
    stream = io.BytesIO()
    for seq in range(3):
        stream.write(pack({"seq": seq, "depth": 10.0 + seq, "ok": True}))
    buffer = stream.getvalue()
    print(f"   {len(buffer)} bytes written")
    print()

    # Walk the buffer
    print("2. Walking the buffer...")
    for offset, value, consumed in iter_decode(buffer):
        print(f"   @{offset:3d} ({consumed} bytes): {value.to_native()}")
    print()

    # Read from the stream
    print("3. Reading from the stream...")
    stream.seek(0)
    while stream.tell() < len(buffer):
        value, consumed = decode_from(stream)
        print(f"   {consumed} bytes -> seq {value['seq'].to_native()}")
    print()

    # Hostile input
    print("4. Decoding hostile input with limits...")
    config = DecoderConfig(max_depth=8, max_length=1024)
    for label, data in [
        ("deep nesting", b"\x91" * 100 + b"\xc0"),
        ("huge length", b"\xdb\xff\xff\xff\xff"),
        ("reserved marker", b"\xc1"),
        ("integer key", b"\x81\x01\x02"),
    ]:
        try:
            decode(data, config=config)
            print(f"   {label}: accepted")
        except DecodeError as e:
            print(f"   {label}: rejected with {type(e).__name__}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
