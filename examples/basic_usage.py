#!/usr/bin/env python3
"""Basic usage example for minipack.

This example demonstrates:
1. Building a value tree
2. Encoding to MessagePack
3. Decoding back to values
4. Calculating encoded sizes
5. Comparing to JSON
"""

from __future__ import annotations

import json

from minipack import Array, Bool, Float32, Int, Map, Str, decode, encode, encoded_size


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("minipack Basic Usage Example")
    print("=" * 60)
    print()

    # Build a value
    print("1. Building a status report value...")
    report = Map(
        {
            "vehicle_id": Int(42),
            "depth_m": Float32(25.0),
            "battery_pct": Int(87),
            "active": Bool(True),
            "mission": Str("survey-north"),
            "waypoints": Array([Int(3), Int(4), Int(5)]),
        }
    )

    for key, value in report.entries:
        print(f"   {key}: {value.to_native()!r} ({value.kind.value})")
    print()

    # Size without encoding
    print("2. Calculating encoded size...")
    for key, value in report.entries:
        print(f"   {key}: {encoded_size(value)} bytes")
    print(f"   Total: {encoded_size(report)} bytes")
    print()

    # Encode
    print("3. Encoding to MessagePack...")
    encoded_data = encode(report)

    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Decode
    print("4. Decoding from binary...")
    decoded, consumed = decode(encoded_data)

    print(f"   Consumed: {consumed} bytes")
    print(f"   Value: {decoded.to_native()}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if decoded == report:
        print("   ✓ Round-trip successful! Values match.")
    else:
        print("   ✗ Round-trip failed! Values don't match.")
    print()

    # Compare to JSON
    print("6. Comparing to JSON encoding...")
    json_bytes = json.dumps(report.to_native()).encode("utf-8")

    print(f"   minipack size: {len(encoded_data)} bytes")
    print(f"   JSON size: {len(json_bytes)} bytes")
    print(f"   Ratio: {len(json_bytes) / len(encoded_data):.1f}x")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
