"""Field types for binding decoded values onto pydantic models.

Each type below is an ``Annotated`` alias whose validator receives the
decoded Value variant and either unwraps it or rejects it. Integer widths
are pinned with the strict discriminators, so a Byte never fills an I32
field and ``Union[I8, I16, I32]`` recovers the width that was on the wire.

Example:
    >>> class Section(NbtModel):
    ...     y: I8 = Field(alias="Y")
    ...     block_light: Optional[ByteArrayField] = Field(default=None, alias="BlockLight")
"""

from __future__ import annotations

from typing import Annotated, Any, Callable, Type

from pydantic import PlainValidator
from pydantic_core import PydanticCustomError

from ..arrays import ByteArray, IntArray, LongArray, _NbtArray
from ..codec.discriminators import (
    accept_f32,
    accept_f64,
    accept_i64,
    strict_i8,
    strict_i16,
    strict_i32,
)
from ..exceptions import ArrayTypeMismatchError, NbtError, TypeMismatchError
from ..value import VALUE_TYPES, String


def _pinned(acceptor: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Adapt an acceptor to pydantic: NbtError becomes a custom validation error.

    The original error rides along in the error context so the loader can
    re-raise it with its path.
    """

    def validate(reported: Any) -> Any:
        try:
            return acceptor(reported)
        except NbtError as e:
            raise PydanticCustomError(
                "nbt_" + e.kind.lower(), "{detail}", {"detail": e.message, "nbt_error": e}
            ) from None

    validate.__name__ = getattr(acceptor, "__name__", "validate")
    return validate


def accept_text(reported: Any) -> str:
    if type(reported) is String:
        return reported.value
    tag = getattr(reported, "tag", None)
    raise TypeMismatchError("String", getattr(tag, "label", type(reported).__name__))


def accept_bool(reported: Any) -> bool:
    """Accept a Byte; zero is False, anything else True."""
    return strict_i8(reported) != 0


def accept_value(reported: Any) -> Any:
    """Accept any Value variant unchanged."""
    if isinstance(reported, VALUE_TYPES):
        return reported
    raise TypeMismatchError("NBT value", type(reported).__name__)


def _array_acceptor(cls: Type[_NbtArray]) -> Callable[[Any], Any]:
    def accept(reported: Any) -> Any:
        if type(reported) is cls:
            return reported
        found = getattr(reported, "tag", None)
        if found is not None and isinstance(reported, _NbtArray):
            raise ArrayTypeMismatchError(cls.element_tag.to_byte(), reported.element_tag.to_byte())
        raise TypeMismatchError(cls.tag.label, getattr(found, "label", type(reported).__name__))

    accept.__name__ = f"accept_{cls.__name__}"
    return accept


I8 = Annotated[int, PlainValidator(_pinned(strict_i8))]
I16 = Annotated[int, PlainValidator(_pinned(strict_i16))]
I32 = Annotated[int, PlainValidator(_pinned(strict_i32))]
I64 = Annotated[int, PlainValidator(_pinned(accept_i64))]
F32 = Annotated[float, PlainValidator(_pinned(accept_f32))]
F64 = Annotated[float, PlainValidator(_pinned(accept_f64))]
Text = Annotated[str, PlainValidator(_pinned(accept_text))]
Bool = Annotated[bool, PlainValidator(_pinned(accept_bool))]

ByteArrayField = Annotated[ByteArray, PlainValidator(_pinned(_array_acceptor(ByteArray)))]
IntArrayField = Annotated[IntArray, PlainValidator(_pinned(_array_acceptor(IntArray)))]
LongArrayField = Annotated[LongArray, PlainValidator(_pinned(_array_acceptor(LongArray)))]

AnyValue = Annotated[Any, PlainValidator(_pinned(accept_value))]
