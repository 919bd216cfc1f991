"""nbtcodec: NBT value decoder

A Python library for decoding NBT (Named Binary Tag), the tag-prefixed
binary format Minecraft uses for worlds, chunks and player data, into an
exactly-typed value tree.

Key Features:
- Tag-first decoding: a Byte stays a Byte, an Int stays an Int
- Owning and zero-copy (borrowed) Byte/Int/Long arrays
- Modified UTF-8 strings that round-trip lone surrogates and NUL
- Pydantic binding of compounds onto typed application structures
- Distinct, path-annotated error kinds for every malformed input

Quick Start:
    >>> from nbtcodec import Byte, Compound, decode
    >>> decode(bytes([10, 0, 0, 1, 0, 1, ord("A"), 5, 0]))
    Compound({'A': Byte(value=5)})
    >>>
    >>> from pydantic import Field
    >>> from nbtcodec.binding import I8, NbtModel, from_bytes
    >>> class Entry(NbtModel):
    ...     a: I8 = Field(alias="A")
    >>> from_bytes(Entry, bytes([10, 0, 0, 1, 0, 1, ord("A"), 5, 0])).a
    5
"""

from __future__ import annotations

from .arrays import BorrowScope, ByteArray, IntArray, LongArray
from .codec import ByteReader, decode, decode_named, decode_payload
from .config import DecoderConfig
from .exceptions import (
    ArrayTypeMismatchError,
    BindingError,
    BufferReleasedError,
    InvalidTextError,
    NbtError,
    NegativeLengthError,
    NestingTooDeepError,
    TruncatedError,
    TypeMismatchError,
    UnexpectedEndError,
    UnknownTagError,
)
from .tag import Tag, from_byte, to_byte
from .value import (
    Byte,
    Compound,
    Double,
    Float,
    Int,
    List,
    Long,
    Short,
    String,
    Value,
    to_python,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "decode",
    "decode_named",
    "decode_payload",
    "ByteReader",
    "DecoderConfig",
    # Tags
    "Tag",
    "from_byte",
    "to_byte",
    # Values
    "Value",
    "Byte",
    "Short",
    "Int",
    "Long",
    "Float",
    "Double",
    "String",
    "List",
    "Compound",
    "to_python",
    # Arrays
    "ByteArray",
    "IntArray",
    "LongArray",
    "BorrowScope",
    # Exceptions
    "NbtError",
    "UnknownTagError",
    "TypeMismatchError",
    "ArrayTypeMismatchError",
    "NegativeLengthError",
    "TruncatedError",
    "UnexpectedEndError",
    "InvalidTextError",
    "NestingTooDeepError",
    "BufferReleasedError",
    "BindingError",
    # Version
    "__version__",
]
