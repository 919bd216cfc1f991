"""Strict scalar discriminators and the array element-tag gate.

The binding layer receives scalars as Value variants, each of which reports
the width it had on the wire. The strict acceptors below take exactly one
width and refuse every other, even when the number would fit. This is what
keeps ``Union[I8, I16, I32]`` fields from turning a Byte into an Int.

64-bit integers and floats cannot be confused that way and use the ordinary
(widening) acceptors.
"""

from __future__ import annotations

from typing import Any, Optional

from ..exceptions import ArrayTypeMismatchError, TypeMismatchError
from ..tag import Tag
from ..value import Byte, Double, Float, Int, Long, Short


def _describe(reported: Any) -> str:
    tag = getattr(reported, "tag", None)
    if isinstance(tag, Tag):
        return tag.label
    return type(reported).__name__


def strict_i8(reported: Any) -> int:
    """Accept only a Byte (8-bit) value.

    Raises:
        TypeMismatchError: For any other reported width or kind
    """
    if type(reported) is Byte:
        return reported.value
    raise TypeMismatchError("Byte (8-bit)", _describe(reported))


def strict_i16(reported: Any) -> int:
    """Accept only a Short (16-bit) value.

    Raises:
        TypeMismatchError: For any other reported width or kind
    """
    if type(reported) is Short:
        return reported.value
    raise TypeMismatchError("Short (16-bit)", _describe(reported))


def strict_i32(reported: Any) -> int:
    """Accept only an Int (32-bit) value.

    Raises:
        TypeMismatchError: For any other reported width or kind
    """
    if type(reported) is Int:
        return reported.value
    raise TypeMismatchError("Int (32-bit)", _describe(reported))


def accept_i64(reported: Any) -> int:
    """Accept any integer variant, widened to 64 bits."""
    if type(reported) in (Byte, Short, Int, Long):
        return reported.value
    raise TypeMismatchError("integer (up to 64-bit)", _describe(reported))


def accept_f32(reported: Any) -> float:
    """Accept only a Float (32-bit) value."""
    if type(reported) is Float:
        return reported.value
    raise TypeMismatchError("Float (32-bit)", _describe(reported))


def accept_f64(reported: Any) -> float:
    """Accept a Float or a Double, widened to 64 bits."""
    if type(reported) in (Float, Double):
        return reported.value
    raise TypeMismatchError("Double (64-bit)", _describe(reported))


def check_array_tag(expected: Tag, tag_byte: int, *, offset: Optional[int] = None) -> None:
    """Require the element-tag byte of an array header to equal expected.

    Args:
        expected: Element kind the array being decoded must declare
        tag_byte: Byte read from the header's element-tag field
        offset: Position of tag_byte in the input

    Raises:
        ArrayTypeMismatchError: If tag_byte differs from expected
    """
    if tag_byte != expected.to_byte():
        raise ArrayTypeMismatchError(expected.to_byte(), tag_byte, offset=offset)
