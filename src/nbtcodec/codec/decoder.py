"""NBT value decoder.

This module provides decode(), which turns an NBT byte buffer into a tree of
Value variants. The decoder always reads the wire tag first and dispatches
straight to the matching variant, so a value's width is never guessed from
its payload.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple, Type, Union

from ..arrays import BorrowScope, ByteArray, IntArray, LongArray, _NbtArray
from ..config import DecoderConfig
from ..exceptions import (
    NbtError,
    NegativeLengthError,
    NestingTooDeepError,
    TruncatedError,
    UnexpectedEndError,
)
from ..tag import Tag
from ..value import (
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
)
from .discriminators import check_array_tag
from .reader import Buffer, ByteReader

logger = logging.getLogger(__name__)

Source = Union[Buffer, BorrowScope]


def decode(
    data: Source,
    *,
    config: Optional[DecoderConfig] = None,
    borrow: Optional[bool] = None,
) -> Value:
    """Decode a named root value and return the value.

    The input starts with a tag byte, then the root name (usually empty),
    then the payload of that tag. Bytes after the root value are ignored.

    Args:
        data: Encoded bytes, or a BorrowScope that bounds the lifetime of
            borrowed arrays
        config: Decoder options (defaults to DecoderConfig())
        borrow: Shortcut overriding config.borrow

    Returns:
        The decoded value (usually a Compound)

    Raises:
        UnknownTagError: If a tag byte is outside 0-12
        UnexpectedEndError: If the root tag is End
        TruncatedError: If the input ends before the value is complete
        NegativeLengthError: If a list or array count is negative
        ArrayTypeMismatchError: If an array header declares the wrong element kind
        InvalidTextError: If a string is not valid modified UTF-8

    Examples:
        ```python
        from nbtcodec import decode

        value = decode(bytes([10, 0, 0, 1, 0, 1, ord("A"), 5, 0]))
        assert value == Compound({"A": Byte(5)})

        # Zero-copy arrays, valid while the scope is open
        with BorrowScope(data) as scope:
            heights = decode(scope, borrow=True)["Heights"]
            print(sum(heights))
        ```
    """
    return decode_named(data, config=config, borrow=borrow)[1]


def decode_named(
    data: Source,
    *,
    config: Optional[DecoderConfig] = None,
    borrow: Optional[bool] = None,
) -> Tuple[str, Value]:
    """Decode a named root value and return ``(name, value)``.

    See decode() for arguments and errors.
    """
    reader, scope, config = _open(data, config, borrow)
    offset = reader.position
    tag = Tag.from_byte(reader.read_u8(), offset=offset)
    if tag is Tag.END:
        raise UnexpectedEndError("End tag is not a valid root value", offset=offset)
    name = reader.read_string()
    logger.debug("Decoding root %s %r", tag.label, name)

    value = _Decoder(reader, config, scope).payload(tag)
    logger.debug("Decoded root %r: %d bytes consumed", name, reader.position)
    return name, value


def decode_payload(
    tag: Tag,
    reader: ByteReader,
    *,
    config: Optional[DecoderConfig] = None,
    scope: Optional[BorrowScope] = None,
) -> Value:
    """Decode the bare payload of a value whose tag has already been read.

    Args:
        tag: Tag read from the wire
        reader: Reader positioned at the start of the payload
        config: Decoder options (defaults to DecoderConfig())
        scope: Scope for borrowed arrays; must wrap the same buffer as reader.
            Created over reader.buffer when omitted in borrow mode.

    Raises:
        UnexpectedEndError: If tag is End
        (plus every error listed on decode())
    """
    config = config or DecoderConfig()
    if config.borrow and scope is None:
        scope = BorrowScope(reader.buffer)
    return _Decoder(reader, config, scope).payload(tag)


def _open(
    data: Source, config: Optional[DecoderConfig], borrow: Optional[bool]
) -> Tuple[ByteReader, Optional[BorrowScope], DecoderConfig]:
    config = config or DecoderConfig()
    if borrow is not None and borrow != config.borrow:
        config = DecoderConfig(
            borrow=borrow,
            array_element_tag=config.array_element_tag,
            max_depth=config.max_depth,
        )

    scope: Optional[BorrowScope] = None
    if isinstance(data, BorrowScope):
        scope = data
    elif config.borrow:
        scope = BorrowScope(data)

    reader = ByteReader(scope.view if scope is not None else data)
    return reader, scope, config


class _Decoder:
    """Recursive payload decoder for one decode call."""

    def __init__(
        self, reader: ByteReader, config: DecoderConfig, scope: Optional[BorrowScope]
    ) -> None:
        self._reader = reader
        self._config = config
        self._scope = scope
        self._depth = 0
        self._dispatch: Dict[Tag, Callable[[], Value]] = {
            Tag.BYTE: lambda: Byte(reader.read_i8()),
            Tag.SHORT: lambda: Short(reader.read_i16()),
            Tag.INT: lambda: Int(reader.read_i32()),
            Tag.LONG: lambda: Long(reader.read_i64()),
            Tag.FLOAT: lambda: Float(reader.read_f32()),
            Tag.DOUBLE: lambda: Double(reader.read_f64()),
            Tag.STRING: lambda: String(reader.read_string()),
            Tag.BYTE_ARRAY: lambda: self._array(ByteArray),
            Tag.INT_ARRAY: lambda: self._array(IntArray),
            Tag.LONG_ARRAY: lambda: self._array(LongArray),
            Tag.LIST: self._list,
            Tag.COMPOUND: self._compound,
        }

    def payload(self, tag: Tag) -> Value:
        if tag is Tag.END:
            raise UnexpectedEndError(
                "End tag where a value is required", offset=self._reader.position
            )
        return self._dispatch[tag]()

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self._config.max_depth:
            raise NestingTooDeepError(
                f"Nesting exceeds max_depth={self._config.max_depth}",
                offset=self._reader.position,
            )

    def _count(self) -> int:
        offset = self._reader.position
        count = self._reader.read_i32()
        if count < 0:
            raise NegativeLengthError(count, offset=offset)
        return count

    def _array(self, cls: Type[_NbtArray]) -> Value:
        reader = self._reader
        if self._config.array_element_tag:
            offset = reader.position
            check_array_tag(cls.element_tag, reader.read_u8(), offset=offset)
        count = self._count()
        size = count * cls.element_size

        if self._scope is not None and self._config.borrow:
            start = reader.position
            reader.read_view(size)
            return cls.from_borrowed(self._scope, count, offset=start)
        return cls.from_wire(reader.read_bytes(size))

    def _list(self) -> List:
        reader = self._reader
        offset = reader.position
        element_tag = Tag.from_byte(reader.read_u8(), offset=offset)

        if element_tag is Tag.END:
            count = reader.read_i32()
            if count != 0:
                logger.warning("List with End element tag declares %d elements; ignoring", count)
            return List((), element_tag=Tag.END)

        count = self._count()
        self._enter()
        items = []
        for index in range(count):
            try:
                items.append(self.payload(element_tag))
            except NbtError as e:
                e.add_path(index)
                raise
        self._depth -= 1
        return List(items, element_tag=element_tag)

    def _compound(self) -> Compound:
        reader = self._reader
        self._enter()
        entries: Dict[str, Value] = {}
        while True:
            offset = reader.position
            if reader.remaining() == 0:
                raise TruncatedError("Compound ended without End tag", offset=offset)
            tag = Tag.from_byte(reader.read_u8(), offset=offset)
            if tag is Tag.END:
                break
            name = reader.read_string()
            try:
                entries[name] = self.payload(tag)
            except NbtError as e:
                e.add_path(name)
                raise
        self._depth -= 1
        return Compound(entries)
