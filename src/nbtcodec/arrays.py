"""NBT numeric array containers.

ByteArray, IntArray and LongArray each come in two forms:

- Owning: holds its own native-endian ``array.array`` of elements.
- Borrowing: holds a reference into the original input buffer plus a count,
  and decodes big-endian elements lazily on iteration. Nothing is copied.

Both forms of the same logical array compare equal and print identically.
Borrowed views depend on a BorrowScope; once the scope is released any
further read raises BufferReleasedError.
"""

from __future__ import annotations

import array
import struct
import sys
from typing import Any, ClassVar, Iterable, Iterator, Optional, Union

from .exceptions import BufferReleasedError, TruncatedError
from .tag import Tag

BufferLike = Union[bytes, bytearray, memoryview]


class BorrowScope:
    """Owner of the input buffer shared by borrowed array views.

    Use it as a context manager to bound the lifetime of borrowed views:

        >>> with BorrowScope(data) as scope:
        ...     value = decode(scope, borrow=True)
        ...     total = sum(value["Heights"])
        >>> list(value["Heights"])  # raises BufferReleasedError
    """

    def __init__(self, data: BufferLike) -> None:
        view = data if isinstance(data, memoryview) else memoryview(data)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
        self._view: Optional[memoryview] = view

    @property
    def view(self) -> memoryview:
        """The shared byte view.

        Raises:
            BufferReleasedError: If the scope has been released
        """
        if self._view is None:
            raise BufferReleasedError("Borrowed buffer was released")
        return self._view

    @property
    def released(self) -> bool:
        return self._view is None

    def release(self) -> None:
        """Invalidate every borrowed view that reads through this scope."""
        self._view = None

    def __len__(self) -> int:
        return len(self.view)

    def __enter__(self) -> BorrowScope:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()


def _typecode_for(size: int) -> str:
    for code in ("b", "h", "i", "l", "q"):
        if array.array(code).itemsize == size:
            return code
    raise RuntimeError(f"No array typecode with itemsize {size}")


class _NbtArray:
    """Shared behaviour for the three array kinds."""

    tag: ClassVar[Tag]
    element_tag: ClassVar[Tag]
    element_size: ClassVar[int]
    _typecode: ClassVar[str]
    _element: ClassVar[struct.Struct]

    __slots__ = ("_data", "_scope", "_offset", "_count")

    def __init__(self) -> None:
        raise TypeError(f"Use {type(self).__name__}.from_owned() or .from_borrowed()")

    @classmethod
    def from_owned(cls, elements: Iterable[int]) -> Any:
        """Wrap an already-decoded sequence of elements."""
        self = object.__new__(cls)
        self._data = array.array(cls._typecode, elements)
        self._scope = None
        self._offset = 0
        self._count = len(self._data)
        return self

    @classmethod
    def from_borrowed(
        cls, buffer: Union[BufferLike, BorrowScope], count: int, *, offset: int = 0
    ) -> Any:
        """Reference count big-endian elements starting at offset in buffer.

        Nothing is read here. A buffer that is too short is reported as
        TruncatedError when the view is first iterated.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self = object.__new__(cls)
        self._data = None
        self._scope = buffer if isinstance(buffer, BorrowScope) else BorrowScope(buffer)
        self._offset = offset
        self._count = count
        return self

    @classmethod
    def from_wire(cls, raw: bytes) -> Any:
        """Build an owning array from big-endian element bytes."""
        data = array.array(cls._typecode)
        data.frombytes(raw)
        if sys.byteorder == "little" and cls.element_size > 1:
            data.byteswap()
        self = object.__new__(cls)
        self._data = data
        self._scope = None
        self._offset = 0
        self._count = len(data)
        return self

    @property
    def is_borrowed(self) -> bool:
        return self._data is None

    def count(self) -> int:
        """Return the number of elements."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def iter(self) -> Iterator[int]:
        """Return a fresh iterator over the elements.

        Raises:
            TruncatedError: (borrowed form, on first step) if the buffer holds
                fewer than count * element_size bytes past the offset
            BufferReleasedError: (borrowed form) if the scope was released
        """
        if self._data is not None:
            return iter(self._data)
        return self._iter_borrowed()

    def _iter_borrowed(self) -> Iterator[int]:
        assert self._scope is not None
        need = self._offset + self._count * self.element_size
        available = len(self._scope.view)
        if need > available:
            raise TruncatedError(
                f"Borrowed {self.tag.label} needs {need - self._offset} bytes, "
                f"buffer has {max(available - self._offset, 0)}",
                offset=self._offset,
            )
        unpack_from = self._element.unpack_from
        position = self._offset
        for _ in range(self._count):
            yield unpack_from(self._scope.view, position)[0]
            position += self.element_size

    def __iter__(self) -> Iterator[int]:
        return self.iter()

    def tolist(self) -> list[int]:
        return list(self.iter())

    def to_owned(self) -> Any:
        """Return an owning copy (self if already owning)."""
        if self._data is not None:
            return self
        return type(self).from_owned(self.iter())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, _NbtArray)
        if self._count != other._count:
            return False
        return all(a == b for a, b in zip(self.iter(), other.iter()))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tolist()!r})"


class ByteArray(_NbtArray):
    """Array of signed 8-bit integers."""

    __slots__ = ()
    tag = Tag.BYTE_ARRAY
    element_tag = Tag.BYTE
    element_size = 1
    _typecode = _typecode_for(1)
    _element = struct.Struct(">b")


class IntArray(_NbtArray):
    """Array of signed 32-bit integers."""

    __slots__ = ()
    tag = Tag.INT_ARRAY
    element_tag = Tag.INT
    element_size = 4
    _typecode = _typecode_for(4)
    _element = struct.Struct(">i")


class LongArray(_NbtArray):
    """Array of signed 64-bit integers."""

    __slots__ = ()
    tag = Tag.LONG_ARRAY
    element_tag = Tag.LONG
    element_size = 8
    _typecode = _typecode_for(8)
    _element = struct.Struct(">q")


ARRAY_TYPES = {cls.tag: cls for cls in (ByteArray, IntArray, LongArray)}
