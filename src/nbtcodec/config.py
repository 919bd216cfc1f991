"""Decoder configuration.

This module provides the DecoderConfig dataclass accepted by every decode
entry point.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecoderConfig:
    """Options controlling how a value tree is decoded.

    Attributes:
        borrow: Build arrays as zero-copy views into the input buffer instead
            of copying their elements (default False). Borrowed arrays stay
            valid only while their buffer scope is open.

        array_element_tag: Array headers carry an element-tag byte before the
            count (default True). Set to False to read plain Minecraft-layout
            arrays, which go straight from the name to the count.

        max_depth: Maximum container nesting (default 256). Deeper input
            raises NestingTooDeepError rather than exhausting the stack.

    Examples:
        ```python
        from nbtcodec import DecoderConfig, decode

        # Zero-copy arrays
        value = decode(data, config=DecoderConfig(borrow=True))

        # Files written by the game itself
        value = decode(data, config=DecoderConfig(array_element_tag=False))
        ```
    """

    borrow: bool = False
    array_element_tag: bool = True
    max_depth: int = 256

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
