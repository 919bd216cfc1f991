"""Binding of decoded NBT values onto pydantic models.

This module provides the NbtModel base class, width-pinned field types and
the from_value() / from_bytes() loaders.
"""

from __future__ import annotations

from .fields import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    AnyValue,
    Bool,
    ByteArrayField,
    IntArrayField,
    LongArrayField,
    Text,
)
from .model import NbtModel, from_bytes, from_value

__all__ = [
    "NbtModel",
    "from_value",
    "from_bytes",
    "I8",
    "I16",
    "I32",
    "I64",
    "F32",
    "F64",
    "Text",
    "Bool",
    "ByteArrayField",
    "IntArrayField",
    "LongArrayField",
    "AnyValue",
]
