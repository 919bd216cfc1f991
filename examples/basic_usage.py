#!/usr/bin/env python3
"""Basic usage example for nbtcodec.

This example demonstrates:
1. Decoding NBT bytes to a typed value tree
2. Zero-copy array decoding inside a BorrowScope
3. Binding a compound onto a pydantic model
4. Handling malformed input
"""

from __future__ import annotations

import struct
from typing import Optional

from pydantic import Field

from nbtcodec import BorrowScope, NbtError, decode, to_python
from nbtcodec.binding import I8, I32, IntArrayField, NbtModel, Text, from_bytes


class Level(NbtModel):
    """Chunk level header.

    Integer fields are pinned to the width they have on the wire.
    """

    x_pos: I32 = Field(alias="xPos")
    light_populated: I8 = Field(alias="LightPopulated")
    status: Text = Field(alias="Status")
    heights: Optional[IntArrayField] = Field(default=None, alias="Heights")


def build_sample() -> bytes:
    """Hand-assemble a small compound: xPos, LightPopulated, Status, Heights."""

    def name(text: str) -> bytes:
        raw = text.encode("ascii")
        return struct.pack(">H", len(raw)) + raw

    body = b""
    body += b"\x03" + name("xPos") + struct.pack(">i", -12)
    body += b"\x01" + name("LightPopulated") + struct.pack(">b", 1)
    body += b"\x08" + name("Status") + name("minecraft:full")
    body += b"\x0b" + name("Heights") + b"\x03" + struct.pack(">i4i", 4, 64, 64, 65, 63)
    return b"\x0a" + name("") + body + b"\x00"


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("nbtcodec Basic Usage Example")
    print("=" * 60)
    print()

    data = build_sample()

    # Decode the value tree
    print("1. Decoding to a value tree...")
    value = decode(data)
    for entry_name, entry in value.items():
        print(f"   {entry_name}: {entry!r}")
    print(f"   As plain Python: {to_python(value)}")
    print()

    # Zero-copy arrays
    print("2. Decoding arrays zero-copy...")
    with BorrowScope(data) as scope:
        heights = decode(scope, borrow=True)["Heights"]
        print(f"   Borrowed: {heights.is_borrowed}, max height {max(heights)}")
    print()

    # Bind to a model
    print("3. Binding to a pydantic model...")
    level = from_bytes(Level, data)
    print(f"   x_pos={level.x_pos} light_populated={level.light_populated}")
    print(f"   status={level.status} heights={level.heights}")
    print()

    # Malformed input
    print("4. Decoding a truncated buffer...")
    try:
        decode(data[:-3])
    except NbtError as e:
        print(f"   {e.kind}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
