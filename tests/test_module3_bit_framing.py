# file: tests/test_module3_bit_framing.py

"""
Unit tests for Module 3: Bit Framing.

Test coverage:
    - Framed message recovery
    - Short streams (InsufficientDataError)
    - Zero / oversized length prefix (InvalidLengthError)
    - Trailing partial bytes and trailing garbage
    - Accepted bit stream representations
"""

import string

import numpy as np
import pytest

from module1_common import FailureKind
from module3_bit_framing import (
    unframe,
    as_bit_array,
    read_length_prefix,
    bits_to_text,
    InsufficientDataError,
    InvalidLengthError,
)
from module3_bit_framing.testing_utils import frame_message, to_bit_string


class TestUnframe:
    """Recovery of well-formed frames."""

    @pytest.mark.parametrize("message", [
        "X",
        "Hello",
        "Secret message 42!",
        string.printable.strip(),
    ])
    def test_recovers_printable_messages(self, message):
        """Framing then unframing returns the original text."""
        assert unframe(frame_message(message)) == message

    def test_latin1_code_points(self):
        """Bytes above 0x7F map to the same code point."""
        message = "caf\xe9\xff"
        assert unframe(frame_message(message)) == message

    def test_trailing_bits_ignored(self):
        """Bits after the declared payload do not leak into the message."""
        rng = np.random.default_rng(7)
        bits = np.concatenate([frame_message("Hi"), rng.integers(0, 2, 500)])
        assert unframe(bits) == "Hi"

    def test_partial_trailing_byte_truncated(self):
        """A payload length that is not a multiple of 8 drops the partial byte."""
        bits = frame_message("Hi", declared_bits=12)
        assert unframe(bits) == "H"

    def test_payload_shorter_than_one_byte(self):
        """A 1-7 bit payload is valid and decodes to an empty string."""
        bits = frame_message("Hi", declared_bits=7)
        assert unframe(bits) == ""

    def test_bit_string_input(self):
        """A '0'/'1' string is accepted as a bit stream."""
        assert unframe(to_bit_string(frame_message("ok"))) == "ok"

    def test_list_input(self):
        """A plain list of ints is accepted as a bit stream."""
        assert unframe(list(frame_message("ok"))) == "ok"

    def test_exact_fit(self):
        """A payload that exactly fills the stream is accepted."""
        bits = frame_message("abc")
        assert len(bits) == 32 + 24
        assert unframe(bits) == "abc"


class TestInsufficientData:
    """Streams too short for a length prefix."""

    @pytest.mark.parametrize("length", [0, 1, 8, 31])
    def test_short_stream(self, length):
        """Fewer than 32 bits always raises InsufficientDataError."""
        bits = np.ones(length, dtype=np.uint8)
        with pytest.raises(InsufficientDataError) as exc_info:
            unframe(bits)
        assert exc_info.value.kind == FailureKind.INSUFFICIENT_DATA
        assert exc_info.value.available_bits == length


class TestInvalidLength:
    """Length prefix out of range."""

    def test_zero_length(self):
        """A zero length prefix is rejected."""
        with pytest.raises(InvalidLengthError, match="0 bits"):
            unframe(np.zeros(64, dtype=np.uint8))

    def test_length_exceeds_payload(self):
        """A length prefix beyond the available bits is rejected."""
        bits = frame_message("Hi", declared_bits=17)
        with pytest.raises(InvalidLengthError) as exc_info:
            unframe(bits)
        assert exc_info.value.declared_bits == 17
        assert exc_info.value.available_bits == 16
        assert exc_info.value.kind == FailureKind.INVALID_LENGTH

    def test_header_only(self):
        """Exactly 32 bits leaves no room for any payload."""
        bits = frame_message("", declared_bits=1)
        with pytest.raises(InvalidLengthError):
            unframe(bits)

    def test_all_ones_header(self):
        """The maximum 32-bit length never fits a realistic stream."""
        with pytest.raises(InvalidLengthError):
            unframe(np.ones(1000, dtype=np.uint8))

    def test_non_binary_string(self):
        """Characters other than '0'/'1' are rejected."""
        with pytest.raises(InvalidLengthError, match="other than 0 and 1"):
            unframe("0000000000000000000000000000102x" + "0" * 16)

    def test_non_binary_values(self):
        """Integer values other than 0/1 are rejected."""
        with pytest.raises(InvalidLengthError):
            unframe([2] * 40)


class TestHelpers:
    """Lower-level helpers."""

    def test_read_length_prefix_big_endian(self):
        """The first 32 bits are read MSB first."""
        bits = frame_message("", declared_bits=0x01020304)
        assert read_length_prefix(bits) == 0x01020304

    def test_bits_to_text(self):
        """Full bytes convert to characters."""
        bits = np.unpackbits(np.frombuffer(b"AB", dtype=np.uint8))
        assert bits_to_text(bits) == "AB"

    def test_bits_to_text_empty(self):
        assert bits_to_text(np.array([], dtype=np.uint8)) == ""

    def test_as_bit_array_dtype(self):
        bits = as_bit_array([1, 0, 1])
        assert bits.dtype == np.uint8
        assert bits.tolist() == [1, 0, 1]

    def test_frame_message_layout(self):
        """Fixture builder writes a bit-length prefix, not a byte length."""
        bits = frame_message("Hi")
        assert len(bits) == 48
        assert read_length_prefix(bits) == 16
