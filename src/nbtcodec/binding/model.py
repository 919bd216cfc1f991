"""Base model for binding NBT compounds onto typed structures.

This module provides NbtModel, which application structures inherit from,
and the from_value() / from_bytes() loaders.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic_core import PydanticCustomError

from ..codec.decoder import Source, decode
from ..config import DecoderConfig
from ..exceptions import BindingError, NbtError, TypeMismatchError
from ..value import Compound, Value

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="NbtModel")


class NbtModel(BaseModel):
    """Base class for structures bound from NBT compounds.

    Fields are declared with the types in ``nbtcodec.binding.fields``. NBT
    names are often PascalCase; use ``Field(alias=...)`` to map them.
    Compound entries without a matching field are ignored.

    Example:
        >>> class Level(NbtModel):
        ...     data_version: I32 = Field(alias="DataVersion")
        ...     x_pos: I32 = Field(alias="xPos")
        ...     heightmap: IntArrayField = Field(alias="Heights")
        ...     extra: Optional[AnyValue] = None
    """

    model_config = ConfigDict(
        # Decoded trees carry Value variants and array containers
        arbitrary_types_allowed=True,
        # Bind partial structures
        extra="ignore",
        # Accept both the alias and the Python field name
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def unwrap_compound(cls, data: Any) -> Any:
        if isinstance(data, Compound):
            return dict(data)
        if isinstance(data, BaseModel) or isinstance(data, dict):
            return data
        found = getattr(getattr(data, "tag", None), "label", type(data).__name__)
        error = TypeMismatchError("Compound", found)
        raise PydanticCustomError(
            "nbt_typemismatch", "{detail}", {"detail": error.message, "nbt_error": error}
        )


def from_value(model_class: Type[M], value: Value) -> M:
    """Bind a decoded value onto a model.

    Args:
        model_class: NbtModel subclass to build
        value: Decoded value, normally a Compound

    Returns:
        Model instance

    Raises:
        TypeMismatchError: If value is not a Compound, or if a single field
            failed a width/kind check (the error carries the field path)
        ArrayTypeMismatchError: If a single array field got another array kind
        BindingError: For any other validation failure

    Examples:
        ```python
        class Entry(NbtModel):
            a: I8 = Field(alias="A")

        entry = from_value(Entry, Compound({"A": Byte(5)}))
        assert entry.a == 5
        ```
    """
    if not isinstance(value, Compound):
        found = getattr(getattr(value, "tag", None), "label", type(value).__name__)
        raise TypeMismatchError("Compound", found)

    try:
        return model_class.model_validate(value)
    except ValidationError as e:
        errors = e.errors()
        original = errors[0].get("ctx", {}).get("nbt_error") if errors else None
        if len(errors) == 1 and isinstance(original, NbtError):
            for segment in reversed(errors[0]["loc"]):
                original.add_path(segment)
            raise original from e
        raise BindingError(
            f"Failed to bind {model_class.__name__}: {e.error_count()} validation error(s)"
        ) from e


def from_bytes(
    model_class: Type[M],
    data: Source,
    *,
    config: Optional[DecoderConfig] = None,
    borrow: Optional[bool] = None,
) -> M:
    """Decode NBT bytes and bind the root compound onto a model.

    Args:
        model_class: NbtModel subclass to build
        data: Encoded bytes or a BorrowScope
        config: Decoder options
        borrow: Shortcut overriding config.borrow

    Raises:
        NbtError: Any decode or binding error
    """
    value = decode(data, config=config, borrow=borrow)
    logger.debug("Binding %s from decoded %s", model_class.__name__, type(value).__name__)
    return from_value(model_class, value)
