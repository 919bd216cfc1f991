"""Byte-level cursor over an input buffer.

This module provides the big-endian primitive reads the decoder needs.
All reads are bounds-checked and raise TruncatedError instead of IndexError.
"""

from __future__ import annotations

import struct
from typing import Union

from ..exceptions import TruncatedError
from .mutf8 import decode_mutf8

Buffer = Union[bytes, bytearray, memoryview]

_I8 = struct.Struct(">b")
_U8 = struct.Struct(">B")
_I16 = struct.Struct(">h")
_U16 = struct.Struct(">H")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")
_F32 = struct.Struct(">f")
_F64 = struct.Struct(">d")


class ByteReader:
    """Reads big-endian primitives from a byte buffer.

    The reader never copies the buffer. ``read_view`` hands out memoryview
    slices so that borrowed arrays can reference the input directly.

    Example:
        >>> reader = ByteReader(b"\\x0a\\x00\\x01")
        >>> reader.read_u8()
        10
        >>> reader.read_i16()
        1
    """

    def __init__(self, data: Buffer) -> None:
        """Initialize a reader positioned at the start of data.

        Args:
            data: Byte buffer to read from
        """
        self._view = data if isinstance(data, memoryview) else memoryview(data)
        if self._view.format != "B" or self._view.ndim != 1:
            self._view = self._view.cast("B")
        self._position = 0

    @property
    def position(self) -> int:
        """Current read offset in bytes."""
        return self._position

    @property
    def buffer(self) -> memoryview:
        """The underlying byte view."""
        return self._view

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._view) - self._position

    def _require(self, num_bytes: int, what: str) -> int:
        start = self._position
        if start + num_bytes > len(self._view):
            raise TruncatedError(
                f"Truncated input reading {what}: need {num_bytes} bytes, "
                f"have {len(self._view) - start}",
                offset=start,
            )
        self._position = start + num_bytes
        return start

    def _unpack(self, fmt: struct.Struct, what: str) -> Union[int, float]:
        start = self._require(fmt.size, what)
        return fmt.unpack_from(self._view, start)[0]

    def read_u8(self) -> int:
        """Read an unsigned byte (used for tag bytes)."""
        return int(self._unpack(_U8, "tag"))

    def read_i8(self) -> int:
        return int(self._unpack(_I8, "byte"))

    def read_i16(self) -> int:
        return int(self._unpack(_I16, "short"))

    def read_u16(self) -> int:
        return int(self._unpack(_U16, "string length"))

    def read_i32(self) -> int:
        return int(self._unpack(_I32, "int"))

    def read_i64(self) -> int:
        return int(self._unpack(_I64, "long"))

    def read_f32(self) -> float:
        return float(self._unpack(_F32, "float"))

    def read_f64(self) -> float:
        return float(self._unpack(_F64, "double"))

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read and copy num_bytes raw bytes.

        Raises:
            TruncatedError: If not enough bytes are available
        """
        start = self._require(num_bytes, f"{num_bytes} bytes")
        return self._view[start : start + num_bytes].tobytes()

    def read_view(self, num_bytes: int) -> memoryview:
        """Skip num_bytes and return a zero-copy view of them.

        Raises:
            TruncatedError: If not enough bytes are available
        """
        start = self._require(num_bytes, f"{num_bytes} bytes")
        return self._view[start : start + num_bytes]

    def read_string(self) -> str:
        """Read a u16 length-prefixed modified UTF-8 string.

        Raises:
            TruncatedError: If the length or the text runs past the end of input
            InvalidTextError: If the bytes are not valid modified UTF-8
        """
        length = self.read_u16()
        start = self._require(length, "string")
        return decode_mutf8(self._view[start : start + length], offset=start)
