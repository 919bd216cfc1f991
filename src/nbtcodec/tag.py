"""Tag catalog: the thirteen wire discriminants.

A tag identifies the kind of the value that follows it on the wire. It does
not carry the value or the name of the data.
"""

from __future__ import annotations

import enum
from typing import Optional

from .exceptions import UnknownTagError


class Tag(enum.IntEnum):
    """An NBT tag kind, bound to its byte discriminant."""

    END = 0  # closes a Compound
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @classmethod
    def from_byte(cls, b: int, *, offset: Optional[int] = None) -> Tag:
        """Convert a discriminant byte to its tag.

        Args:
            b: Byte value read from the wire (0-255)
            offset: Position of the byte, reported in the error if conversion fails

        Raises:
            UnknownTagError: If b is not in 0-12
        """
        try:
            return _BY_BYTE[b]
        except (KeyError, TypeError):
            raise UnknownTagError(b, offset=offset) from None

    def to_byte(self) -> int:
        """Return the wire discriminant of this tag."""
        return int(self.value)

    @property
    def label(self) -> str:
        """CamelCase name as used in NBT documentation (e.g. ``IntArray``)."""
        return "".join(part.capitalize() for part in self.name.split("_"))


_BY_BYTE = {int(t.value): t for t in Tag}

# Element kind that an array header must declare for each array tag.
ARRAY_ELEMENT_TAGS = {
    Tag.BYTE_ARRAY: Tag.BYTE,
    Tag.INT_ARRAY: Tag.INT,
    Tag.LONG_ARRAY: Tag.LONG,
}


def from_byte(b: int, *, offset: Optional[int] = None) -> Tag:
    """Module-level alias for Tag.from_byte."""
    return Tag.from_byte(b, offset=offset)


def to_byte(tag: Tag) -> int:
    """Module-level alias for Tag.to_byte."""
    return tag.to_byte()
