"""Exception hierarchy for nbtcodec.

This module defines all custom exceptions used throughout the package.
Every error kind inherits directly from NbtError, so a caller can catch any
decode failure with one ``except`` clause or pick out a single kind.

All kinds are terminal for the decode call that raised them. Nothing is
retried internally and no partial value is ever returned.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

PathSegment = Union[str, int]


class NbtError(Exception):
    """Base exception for all nbtcodec errors.

    Attributes:
        offset: Byte offset in the input where the failure was detected, if known
        path: Compound names and list indexes leading from the root to the
            failing node. Filled in by the decoder while the error propagates.
    """

    kind = "NbtError"

    def __init__(self, message: str, *, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.path: Tuple[PathSegment, ...] = ()

    def add_path(self, segment: PathSegment) -> None:
        """Prepend one path segment (called by each enclosing container)."""
        self.path = (segment,) + self.path

    def path_str(self) -> str:
        """Render the path like ``Level.Sections[3].Y``."""
        out = ""
        for segment in self.path:
            if isinstance(segment, int):
                out += f"[{segment}]"
            else:
                out += f".{segment}" if out else segment
        return out

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"at {self.path_str()}")
        if self.offset is not None:
            parts.append(f"(offset {self.offset})")
        return " ".join(parts)


class UnknownTagError(NbtError):
    """Raised when a tag byte lies outside the 0-12 catalog."""

    kind = "UnknownTag"

    def __init__(self, tag_byte: int, *, offset: Optional[int] = None) -> None:
        super().__init__(f"Unknown tag byte {tag_byte}", offset=offset)
        self.tag_byte = tag_byte


class TypeMismatchError(NbtError):
    """Raised when a scalar was reported at a width or kind other than the expected one.

    Examples:
        - A Byte value offered where a 32-bit integer is required
        - A Double offered where a 32-bit float is required
    """

    kind = "TypeMismatch"

    def __init__(self, expected: str, found: str, *, offset: Optional[int] = None) -> None:
        super().__init__(f"Type mismatch: expected {expected}, found {found}", offset=offset)
        self.expected = expected
        self.found = found


class ArrayTypeMismatchError(NbtError):
    """Raised when an array header declares a different element kind than expected."""

    kind = "ArrayTypeMismatch"

    def __init__(self, expected: int, found: int, *, offset: Optional[int] = None) -> None:
        super().__init__(
            f"Array type mismatch: expected element tag {expected}, found {found}",
            offset=offset,
        )
        self.expected = expected
        self.found = found


class NegativeLengthError(NbtError):
    """Raised when a list or array count field is negative."""

    kind = "NegativeLength"

    def __init__(self, length: int, *, offset: Optional[int] = None) -> None:
        super().__init__(f"Negative length {length}", offset=offset)
        self.length = length


class TruncatedError(NbtError):
    """Raised when the input ends before a construct is complete.

    Examples:
        - Compound without its terminating End tag
        - Array count larger than the remaining bytes
        - Borrowed array view over a buffer shorter than count * element size
    """

    kind = "Truncated"


class UnexpectedEndError(NbtError):
    """Raised when an End tag appears where a value is required."""

    kind = "UnexpectedEnd"


class InvalidTextError(NbtError):
    """Raised when a string payload is not valid modified UTF-8."""

    kind = "InvalidText"


class NestingTooDeepError(NbtError):
    """Raised when containers nest deeper than the configured limit."""

    kind = "NestingTooDeep"


class BufferReleasedError(NbtError):
    """Raised when a borrowed array is read after its buffer scope was closed."""

    kind = "BufferReleased"


class BindingError(NbtError):
    """Raised when a decoded value cannot be bound onto the requested model.

    The underlying pydantic ValidationError is chained as ``__cause__``.
    """

    kind = "Binding"
