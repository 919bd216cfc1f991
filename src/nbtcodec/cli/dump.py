"""Tree dump CLI command."""

from __future__ import annotations

from pathlib import Path

from ..arrays import ByteArray, IntArray, LongArray
from ..codec.decoder import decode_named
from ..config import DecoderConfig
from ..value import Compound, List, Value

# Arrays longer than this are summarised
_PREVIEW = 8


def dump_file(file_path: Path, *, borrow: bool = False, array_element_tag: bool = True) -> None:
    """Decode an uncompressed NBT file and print its tree.

    Args:
        file_path: Path to the NBT file
        borrow: Decode arrays as zero-copy views
        array_element_tag: Array headers carry an element-tag byte
    """
    data = file_path.read_bytes()
    config = DecoderConfig(borrow=borrow, array_element_tag=array_element_tag)
    name, value = decode_named(data, config=config)

    for line in format_tree(name, value):
        print(line)


def format_tree(name: str, value: Value, indent: int = 0) -> list[str]:
    """Render one node and its children, one line per node."""
    pad = "  " * indent
    label = f"{value.tag.label}({name!r})"

    if isinstance(value, Compound):
        lines = [f"{pad}{label}: {len(value)} entr{'y' if len(value) == 1 else 'ies'}"]
        for child_name, child in value.items():
            lines.extend(format_tree(child_name, child, indent + 1))
        return lines

    if isinstance(value, List):
        element = value.element_tag.label if value.element_tag is not None else "End"
        lines = [f"{pad}{label}: {len(value)} x {element}"]
        for index, child in enumerate(value):
            lines.extend(format_tree(f"[{index}]", child, indent + 1))
        return lines

    if isinstance(value, (ByteArray, IntArray, LongArray)):
        items = []
        for index, element_value in enumerate(value):
            if index == _PREVIEW:
                items.append("...")
                break
            items.append(str(element_value))
        return [f"{pad}{label}: {value.count()} elements [{', '.join(items)}]"]

    return [f"{pad}{label}: {value.value!r}"]
