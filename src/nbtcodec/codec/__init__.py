"""Binary decoder for nbtcodec.

This module provides the byte reader, the modified UTF-8 text codec, the
strict scalar discriminators and the recursive value decoder.
"""

from __future__ import annotations

from .decoder import decode, decode_named, decode_payload
from .discriminators import (
    accept_f32,
    accept_f64,
    accept_i64,
    check_array_tag,
    strict_i8,
    strict_i16,
    strict_i32,
)
from .mutf8 import decode_mutf8, encode_mutf8
from .reader import ByteReader

__all__ = [
    "decode",
    "decode_named",
    "decode_payload",
    "ByteReader",
    "decode_mutf8",
    "encode_mutf8",
    "strict_i8",
    "strict_i16",
    "strict_i32",
    "accept_i64",
    "accept_f32",
    "accept_f64",
    "check_array_tag",
]
