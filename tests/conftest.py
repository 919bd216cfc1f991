"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import struct
from typing import Any

import pytest

from nbtcodec import (
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
    Tag,
)
from nbtcodec.codec.mutf8 import encode_mutf8

_SCALAR_FORMATS = {
    Byte: ">b",
    Short: ">h",
    Int: ">i",
    Long: ">q",
    Float: ">f",
    Double: ">d",
}


class WireEncoder:
    """Test-side NBT writer used to build decoder inputs."""

    def __init__(self, array_element_tag: bool = True) -> None:
        self.array_element_tag = array_element_tag

    def string(self, text: str) -> bytes:
        raw = encode_mutf8(text)
        return struct.pack(">H", len(raw)) + raw

    def payload(self, value: Any) -> bytes:
        fmt = _SCALAR_FORMATS.get(type(value))
        if fmt is not None:
            return struct.pack(fmt, value.value)
        if isinstance(value, String):
            return self.string(value.value)
        if isinstance(value, (ByteArray, IntArray, LongArray)):
            head = bytes([value.element_tag]) if self.array_element_tag else b""
            code = {1: "b", 4: "i", 8: "q"}[value.element_size]
            elements = value.tolist()
            return (
                head
                + struct.pack(">i", len(elements))
                + struct.pack(f">{len(elements)}{code}", *elements)
            )
        if isinstance(value, List):
            out = bytes([value.element_tag]) + struct.pack(">i", len(value))
            return out + b"".join(self.payload(item) for item in value)
        if isinstance(value, Compound):
            out = b""
            for name, child in value.items():
                out += bytes([child.tag]) + self.string(name) + self.payload(child)
            return out + bytes([Tag.END])
        raise TypeError(f"Cannot encode {value!r}")

    def named(self, value: Any, name: str = "") -> bytes:
        """Encode a complete root: tag, name, payload."""
        return bytes([value.tag]) + self.string(name) + self.payload(value)


@pytest.fixture(scope="session")
def encoder() -> WireEncoder:
    """Wire encoder writing array element-tag bytes."""
    return WireEncoder()


@pytest.fixture(scope="session")
def plain_encoder() -> WireEncoder:
    """Wire encoder writing plain game-layout arrays (no element-tag byte)."""
    return WireEncoder(array_element_tag=False)


@pytest.fixture
def scenario_bytes() -> bytes:
    """Compound with one Byte entry named "A" holding 5."""
    return bytes([10, 0, 0, 1, 0, 1, ord("A"), 5, 0])


@pytest.fixture
def int_array_bytes() -> bytes:
    """Root IntArray declaring Int elements, count 2, values 1 and -1."""
    return (
        bytes([11, 0, 0, 3])
        + struct.pack(">i", 2)
        + struct.pack(">ii", 1, -1)
    )
