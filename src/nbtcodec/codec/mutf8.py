"""Modified UTF-8 text codec.

NBT strings use the JVM's modified UTF-8:
- U+0000 is written as the two-byte sequence C0 80
- Characters above U+FFFF are written as a UTF-16 surrogate pair, each
  surrogate encoded as its own three-byte sequence
- Four-byte UTF-8 sequences never appear

Decoding follows ``java.io.DataInput.readUTF``: a surrogate pair is joined
into one code point, a lone surrogate is kept as-is so the text still round-trips.
"""

from __future__ import annotations

from typing import Optional, Union

from ..exceptions import InvalidTextError


def decode_mutf8(data: Union[bytes, bytearray, memoryview], *, offset: Optional[int] = None) -> str:
    """Decode modified UTF-8 bytes to a str.

    Args:
        data: Encoded bytes (without the length prefix)
        offset: Input offset of data[0], used in error reports

    Raises:
        InvalidTextError: On a malformed or four-byte sequence
    """
    raw = bytes(data)
    if raw.isascii():
        return raw.decode("ascii")

    base = offset or 0
    units: list[int] = []
    i = 0
    n = len(raw)
    while i < n:
        b0 = raw[i]
        if b0 < 0x80:
            units.append(b0)
            i += 1
        elif b0 & 0xE0 == 0xC0:
            if i + 1 >= n or raw[i + 1] & 0xC0 != 0x80:
                raise InvalidTextError("Invalid modified UTF-8 two-byte sequence", offset=base + i)
            units.append(((b0 & 0x1F) << 6) | (raw[i + 1] & 0x3F))
            i += 2
        elif b0 & 0xF0 == 0xE0:
            if i + 2 >= n or raw[i + 1] & 0xC0 != 0x80 or raw[i + 2] & 0xC0 != 0x80:
                raise InvalidTextError(
                    "Invalid modified UTF-8 three-byte sequence", offset=base + i
                )
            units.append(((b0 & 0x0F) << 12) | ((raw[i + 1] & 0x3F) << 6) | (raw[i + 2] & 0x3F))
            i += 3
        else:
            raise InvalidTextError(
                f"Invalid modified UTF-8 lead byte 0x{b0:02X}", offset=base + i
            )

    return _join_utf16(units)


def _join_utf16(units: list[int]) -> str:
    chars: list[str] = []
    i = 0
    n = len(units)
    while i < n:
        unit = units[i]
        if 0xD800 <= unit <= 0xDBFF and i + 1 < n and 0xDC00 <= units[i + 1] <= 0xDFFF:
            chars.append(chr(0x10000 + ((unit - 0xD800) << 10) + (units[i + 1] - 0xDC00)))
            i += 2
        else:
            chars.append(chr(unit))
            i += 1
    return "".join(chars)


def encode_mutf8(text: str) -> bytes:
    """Encode a str to modified UTF-8 bytes (without a length prefix)."""
    out = bytearray()
    for ch in text:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            _put_unit(out, 0xD800 + (cp >> 10))
            _put_unit(out, 0xDC00 + (cp & 0x3FF))
        else:
            _put_unit(out, cp)
    return bytes(out)


def _put_unit(out: bytearray, unit: int) -> None:
    if 0 < unit < 0x80:
        out.append(unit)
    elif unit < 0x800:
        # U+0000 lands here too, as C0 80
        out.append(0xC0 | (unit >> 6))
        out.append(0x80 | (unit & 0x3F))
    else:
        out.append(0xE0 | (unit >> 12))
        out.append(0x80 | ((unit >> 6) & 0x3F))
        out.append(0x80 | (unit & 0x3F))
