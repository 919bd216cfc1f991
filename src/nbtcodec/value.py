"""Composite value model.

A decoded NBT tree is built from the variant types below. Each variant knows
its wire tag (``Byte.tag is Tag.BYTE``), so the decoder selects the variant
from the tag it read and never widens or narrows a value.

Example:
    >>> value = decode(data)
    >>> value["DataVersion"]
    Int(value=3465)
    >>> to_python(value)
    {'DataVersion': 3465, ...}
"""

from __future__ import annotations

import struct
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, Iterator, Optional, Tuple, Union

from .arrays import ByteArray, IntArray, LongArray
from .tag import Tag


def _check_range(kind: str, value: int, bits: int) -> None:
    lo = -(1 << (bits - 1))
    hi = (1 << (bits - 1)) - 1
    if not lo <= value <= hi:
        raise ValueError(f"{kind} value {value} out of range [{lo}, {hi}]")


@dataclass(frozen=True)
class Byte:
    value: int
    tag: ClassVar[Tag] = Tag.BYTE

    def __post_init__(self) -> None:
        _check_range("Byte", self.value, 8)


@dataclass(frozen=True)
class Short:
    value: int
    tag: ClassVar[Tag] = Tag.SHORT

    def __post_init__(self) -> None:
        _check_range("Short", self.value, 16)


@dataclass(frozen=True)
class Int:
    value: int
    tag: ClassVar[Tag] = Tag.INT

    def __post_init__(self) -> None:
        _check_range("Int", self.value, 32)


@dataclass(frozen=True)
class Long:
    value: int
    tag: ClassVar[Tag] = Tag.LONG

    def __post_init__(self) -> None:
        _check_range("Long", self.value, 64)


@dataclass(frozen=True)
class Float:
    """32-bit float. The value is rounded to single precision on construction."""

    value: float
    tag: ClassVar[Tag] = Tag.FLOAT

    def __post_init__(self) -> None:
        single = struct.unpack(">f", struct.pack(">f", self.value))[0]
        object.__setattr__(self, "value", single)


@dataclass(frozen=True)
class Double:
    value: float
    tag: ClassVar[Tag] = Tag.DOUBLE


@dataclass(frozen=True)
class String:
    value: str
    tag: ClassVar[Tag] = Tag.STRING


@dataclass(frozen=True)
class List(Sequence):
    """Ordered, homogeneous sequence of values.

    ``element_tag`` is the tag declared on the wire. It defaults to the tag of
    the first item (End for an empty list) and is not part of equality, so an
    empty list compares equal whatever element tag it declared.
    """

    items: Tuple[Value, ...] = ()
    element_tag: Optional[Tag] = field(default=None, compare=False)
    tag: ClassVar[Tag] = Tag.LIST

    def __post_init__(self) -> None:
        items = tuple(self.items)
        object.__setattr__(self, "items", items)
        if self.element_tag is None:
            object.__setattr__(self, "element_tag", items[0].tag if items else Tag.END)
        for index, item in enumerate(items):
            if item.tag is not self.element_tag:
                raise ValueError(
                    f"List of {self.element_tag.label} holds a {item.tag.label} at index {index}"
                )

    def __getitem__(self, index: Any) -> Any:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)


class Compound(Mapping):
    """Name-keyed collection of values. Keys are unique; order is not significant."""

    tag: ClassVar[Tag] = Tag.COMPOUND

    __slots__ = ("_entries",)

    def __init__(
        self, entries: Union[Mapping[str, Value], Iterable[Tuple[str, Value]], None] = None
    ) -> None:
        self._entries: Dict[str, Value] = dict(entries) if entries is not None else {}

    def __getitem__(self, name: str) -> Value:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Compound):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Compound({self._entries!r})"


Value = Union[
    Byte,
    Short,
    Int,
    Long,
    Float,
    Double,
    String,
    ByteArray,
    IntArray,
    LongArray,
    List,
    Compound,
]

VALUE_TYPES: Tuple[type, ...] = (
    Byte,
    Short,
    Int,
    Long,
    Float,
    Double,
    String,
    ByteArray,
    IntArray,
    LongArray,
    List,
    Compound,
)


def to_python(value: Value) -> Any:
    """Convert a value tree to plain Python objects.

    Scalars become int/float/str, arrays become lists of int, lists become
    lists and compounds become dicts. Width information is lost.
    """
    if isinstance(value, Compound):
        return {name: to_python(child) for name, child in value.items()}
    if isinstance(value, List):
        return [to_python(child) for child in value]
    if isinstance(value, (ByteArray, IntArray, LongArray)):
        return value.tolist()
    return value.value
