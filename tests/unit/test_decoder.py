"""Unit tests for decoding."""

from __future__ import annotations

import logging
import struct
from typing import Any

import pytest

from nbtcodec import (
    ArrayTypeMismatchError,
    BorrowScope,
    BufferReleasedError,
    Byte,
    ByteArray,
    ByteReader,
    Compound,
    DecoderConfig,
    Double,
    Float,
    Int,
    IntArray,
    InvalidTextError,
    List,
    Long,
    LongArray,
    NbtError,
    NegativeLengthError,
    NestingTooDeepError,
    Short,
    String,
    Tag,
    TruncatedError,
    UnexpectedEndError,
    UnknownTagError,
    decode,
    decode_named,
    decode_payload,
)


def i32(n: int) -> bytes:
    return struct.pack(">i", n)


class TestScenarios:
    """Test the reference byte sequences."""

    def test_compound_with_one_byte(self, scenario_bytes: bytes) -> None:
        """Test [10, 0,0, 1, 0,1,'A', 5, 0] decodes to {"A": Byte(5)}."""
        value = decode(scenario_bytes)

        assert value == Compound({"A": Byte(5)})
        assert type(value["A"]) is Byte

    def test_root_name(self, scenario_bytes: bytes) -> None:
        name, value = decode_named(scenario_bytes)
        assert name == ""
        assert isinstance(value, Compound)

    def test_int_array_both_modes(self, int_array_bytes: bytes) -> None:
        """Test the IntArray scenario in owning and borrowing mode."""
        owned = decode(int_array_bytes)
        borrowed = decode(int_array_bytes, borrow=True)

        assert owned == IntArray.from_owned([1, -1])
        assert borrowed == IntArray.from_owned([1, -1])
        assert owned == borrowed
        assert not owned.is_borrowed
        assert borrowed.is_borrowed


class TestScalars:
    """Test scalar payloads."""

    @pytest.mark.parametrize(
        "value",
        [
            Byte(-5),
            Short(300),
            Int(-70000),
            Long(2**40),
            Float(1.5),
            Double(-0.1),
            String("minecraft:oak_log"),
            String(""),
        ],
    )
    def test_scalar(self, encoder: Any, value: Any) -> None:
        decoded = decode(encoder.named(value, "v"))
        assert decoded == value
        assert type(decoded) is type(value)

    @pytest.mark.parametrize("cls", [Byte, Short, Int, Long])
    def test_width_kept(self, encoder: Any, cls: type) -> None:
        """Test the same number decodes to the variant that was written."""
        decoded = decode(encoder.named(cls(5)))

        assert type(decoded) is cls
        for other in (Byte, Short, Int, Long):
            if other is not cls:
                assert decoded != other(5)

    def test_payload_only(self) -> None:
        reader = ByteReader(b"\x01\x00")
        assert decode_payload(Tag.SHORT, reader) == Short(256)
        assert reader.position == 2


class TestCompounds:
    """Test compound decoding."""

    def test_empty_compound_is_one_end_byte(self, encoder: Any) -> None:
        """Test Compound{} is a single End byte and decodes back."""
        assert encoder.payload(Compound()) == b"\x00"
        assert decode_payload(Tag.COMPOUND, ByteReader(b"\x00")) == Compound()

    def test_missing_end_is_truncated(self) -> None:
        """Test a compound without End fails with Truncated."""
        data = bytes([10, 0, 0, 1, 0, 1, ord("A"), 5])
        with pytest.raises(TruncatedError, match="without End") as excinfo:
            decode(data)
        assert excinfo.value.offset == 8

    def test_duplicate_name_last_wins(self) -> None:
        data = bytes([10, 0, 0, 1, 0, 1, ord("A"), 5, 1, 0, 1, ord("A"), 6, 0])
        assert decode(data) == Compound({"A": Byte(6)})

    def test_nested(self, encoder: Any) -> None:
        value = Compound(
            {
                "Level": Compound(
                    {
                        "xPos": Int(3),
                        "Sections": List([Compound({"Y": Byte(0)}), Compound({"Y": Byte(1)})]),
                    }
                ),
                "DataVersion": Int(3465),
            }
        )
        assert decode(encoder.named(value)) == value

    def test_trailing_bytes_ignored(self, scenario_bytes: bytes) -> None:
        assert decode(scenario_bytes + b"\xff\xff") == Compound({"A": Byte(5)})


class TestLists:
    """Test list decoding."""

    def test_list_of_ints(self, encoder: Any) -> None:
        value = List([Int(1), Int(2), Int(3)])
        decoded = decode(encoder.named(value))

        assert decoded == value
        assert decoded.element_tag is Tag.INT

    def test_end_list_ignores_count(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test an End-typed list decodes to zero elements whatever its count."""
        data = bytes([9, 0, 0, 0]) + i32(5)
        with caplog.at_level(logging.WARNING, logger="nbtcodec"):
            value = decode(data)

        assert value == List()
        assert value.element_tag is Tag.END
        assert "ignoring" in caplog.text

    def test_zero_count_keeps_tag(self) -> None:
        """Test an empty list may declare any element tag."""
        value = decode(bytes([9, 0, 0, 10]) + i32(0))

        assert value == List()
        assert value.element_tag is Tag.COMPOUND

    def test_negative_count(self) -> None:
        """Test count -1 fails rather than reading as zero or wrapping."""
        with pytest.raises(NegativeLengthError) as excinfo:
            decode(bytes([9, 0, 0, 1]) + i32(-1))
        assert excinfo.value.length == -1
        assert excinfo.value.offset == 4

    def test_count_beyond_input(self) -> None:
        with pytest.raises(TruncatedError):
            decode(bytes([9, 0, 0, 1]) + i32(3) + b"\x01\x02")

    def test_unknown_element_tag(self) -> None:
        with pytest.raises(UnknownTagError):
            decode(bytes([9, 0, 0, 13]) + i32(0))


class TestArrays:
    """Test array decoding."""

    @pytest.mark.parametrize(
        "value",
        [
            ByteArray.from_owned([0, -1, 127]),
            IntArray.from_owned([2**31 - 1, -(2**31)]),
            LongArray.from_owned([2**63 - 1, -1, 0]),
            LongArray.from_owned([]),
        ],
    )
    @pytest.mark.parametrize("borrow", [False, True])
    def test_array(self, encoder: Any, value: Any, borrow: bool) -> None:
        decoded = decode(encoder.named(value), borrow=borrow)

        assert decoded == value
        assert type(decoded) is type(value)
        assert decoded.is_borrowed is borrow

    def test_int_array_declaring_long_array(self) -> None:
        """Test the element-tag gate refuses a LongArray header on an IntArray."""
        data = bytes([11, 0, 0, 12]) + i32(1) + b"\x00" * 8
        with pytest.raises(ArrayTypeMismatchError) as excinfo:
            decode(data)
        assert excinfo.value.offset == 3

    def test_int_array_declaring_long_elements(self) -> None:
        data = bytes([11, 0, 0, 4]) + i32(1) + b"\x00" * 8
        with pytest.raises(ArrayTypeMismatchError):
            decode(data)

    @pytest.mark.parametrize("tag", [7, 11, 12])
    def test_negative_count(self, tag: int) -> None:
        element = {7: 1, 11: 3, 12: 4}[tag]
        with pytest.raises(NegativeLengthError):
            decode(bytes([tag, 0, 0, element]) + i32(-1))

    @pytest.mark.parametrize("borrow", [False, True])
    def test_truncated_elements(self, borrow: bool) -> None:
        data = bytes([12, 0, 0, 4]) + i32(2) + b"\x00" * 12
        with pytest.raises(TruncatedError):
            decode(data, borrow=borrow)

    def test_plain_layout(self, plain_encoder: Any) -> None:
        """Test arrays without an element-tag byte."""
        value = Compound({"Heights": IntArray.from_owned([64, 65])})
        config = DecoderConfig(array_element_tag=False)

        assert decode(plain_encoder.named(value), config=config) == value

    def test_borrowed_views_share_input(self, encoder: Any) -> None:
        data = bytearray(encoder.named(ByteArray.from_owned([1, 2])))
        value = decode(data, borrow=True)

        data[-1] = 9
        assert value.tolist() == [1, 9]


class TestBorrowScope:
    """Test borrowing through an explicit scope."""

    def test_views_invalid_after_scope(self, encoder: Any) -> None:
        value = Compound(
            {"a": IntArray.from_owned([1, 2]), "b": List([LongArray.from_owned([3])])}
        )
        with BorrowScope(encoder.named(value)) as scope:
            decoded = decode(scope, borrow=True)
            assert decoded == value

        with pytest.raises(BufferReleasedError):
            decoded["a"].tolist()
        with pytest.raises(BufferReleasedError):
            decoded["b"][0].tolist()

    def test_scope_without_borrow_copies(self, encoder: Any) -> None:
        with BorrowScope(encoder.named(IntArray.from_owned([4]))) as scope:
            decoded = decode(scope)

        assert decoded.tolist() == [4]


class TestDecodeErrors:
    """Test error handling."""

    def test_root_end(self) -> None:
        with pytest.raises(UnexpectedEndError):
            decode(b"\x00")

    def test_payload_end(self) -> None:
        with pytest.raises(UnexpectedEndError):
            decode_payload(Tag.END, ByteReader(b""))

    def test_unknown_root_tag(self) -> None:
        with pytest.raises(UnknownTagError) as excinfo:
            decode(b"\x0d\x00\x00")
        assert excinfo.value.offset == 0

    def test_empty_input(self) -> None:
        with pytest.raises(TruncatedError):
            decode(b"")

    def test_error_path(self) -> None:
        """Test nested failures report the path to the failing node."""
        data = bytes([10, 0, 0, 9, 0, 1, ord("L"), 10]) + i32(2) + bytes([0, 99])
        with pytest.raises(UnknownTagError) as excinfo:
            decode(data)

        assert excinfo.value.path == ("L", 1)
        assert excinfo.value.offset == 13
        assert "at L[1]" in str(excinfo.value)

    def test_invalid_name(self) -> None:
        data = bytes([10, 0, 0, 1, 0, 1, 0xFF, 5, 0])
        with pytest.raises(InvalidTextError):
            decode(data)

    def test_all_errors_share_base(self) -> None:
        with pytest.raises(NbtError):
            decode(bytes([9, 0, 0, 1]) + i32(-1))

    def test_depth_limit(self) -> None:
        data = bytes([10, 0, 0, 10, 0, 1, ord("a"), 10, 0, 1, ord("b"), 0, 0, 0])

        assert decode(data, config=DecoderConfig(max_depth=3)) is not None
        with pytest.raises(NestingTooDeepError):
            decode(data, config=DecoderConfig(max_depth=2))

    def test_pathological_nesting(self) -> None:
        """Test deeply nested input hits the depth limit, not the interpreter stack."""
        data = bytes([9, 0, 0]) + (bytes([9]) + i32(1)) * 400
        with pytest.raises(NestingTooDeepError):
            decode(data)


class TestConfig:
    """Test DecoderConfig."""

    def test_defaults(self) -> None:
        config = DecoderConfig()
        assert config.borrow is False
        assert config.array_element_tag is True
        assert config.max_depth == 256

    def test_invalid_depth(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            DecoderConfig(max_depth=0)

    def test_borrow_shortcut_overrides(self, int_array_bytes: bytes) -> None:
        config = DecoderConfig(borrow=True)
        assert decode(int_array_bytes, config=config, borrow=False).is_borrowed is False
