# file: src/module3_bit_framing/framer.py

"""
Length-prefixed bit framing shared by the visual and audio channels.

Frame structure (32 + N bits):
    [length:32][payload:N]

    - length: unsigned big-endian integer, number of payload BITS
    - payload: 8 bits per character, MSB first

A trailing partial byte (N not a multiple of 8) is dropped when the
payload is converted to text.
"""

import struct
from typing import Sequence, Union

import numpy as np

from module1_common.errors import InsufficientDataError, InvalidLengthError


LENGTH_PREFIX_BITS = 32
BITS_PER_CHAR = 8

BitsLike = Union[np.ndarray, Sequence[int], str]


def as_bit_array(bits: BitsLike) -> np.ndarray:
    """
    Normalize a bit stream to a uint8 array of 0/1 values.

    Args:
        bits: numpy array, sequence of ints, or a string of '0'/'1' characters

    Returns:
        bits: np.ndarray (N,) dtype uint8

    Raises:
        InvalidLengthError: If the stream holds anything other than 0/1
    """
    if isinstance(bits, str):
        array = np.frombuffer(bits.encode("ascii", errors="replace"), dtype=np.uint8).astype(np.int16) - ord("0")
    else:
        array = np.asarray(bits, dtype=np.int64).reshape(-1)

    if array.size and (array.min() < 0 or array.max() > 1):
        raise InvalidLengthError("Bit stream contains values other than 0 and 1")

    return array.astype(np.uint8)


def read_length_prefix(bits: np.ndarray) -> int:
    """
    Parse the 32-bit big-endian length prefix.

    Args:
        bits: Bit array with at least 32 elements

    Returns:
        Declared payload length in bits
    """
    header = np.packbits(bits[:LENGTH_PREFIX_BITS], bitorder='big').tobytes()
    return struct.unpack('>I', header)[0]


def bits_to_text(bits: np.ndarray) -> str:
    """
    Convert payload bits to text, one character per full 8-bit group.

    Each byte maps to the character with the same code point (0-255).
    """
    full_bits = len(bits) - (len(bits) % BITS_PER_CHAR)
    if full_bits == 0:
        return ""
    data = np.packbits(bits[:full_bits], bitorder='big').tobytes()
    return data.decode('latin-1')


def unframe(bits: BitsLike) -> str:
    """
    Recover the message carried by a length-prefixed bit stream.

    Args:
        bits: Raw bit stream; bits beyond the declared payload are ignored

    Returns:
        Decoded message

    Raises:
        InsufficientDataError: Fewer than 32 bits available
        InvalidLengthError: Length prefix is zero, exceeds the available
                            payload bits, or the stream is not binary
    """
    bits = as_bit_array(bits)

    if len(bits) < LENGTH_PREFIX_BITS:
        raise InsufficientDataError(
            f"Need at least {LENGTH_PREFIX_BITS} bits for the length prefix, got {len(bits)}",
            available_bits=len(bits),
        )

    available = len(bits) - LENGTH_PREFIX_BITS
    message_length = read_length_prefix(bits)

    if message_length == 0 or message_length > available:
        raise InvalidLengthError(
            f"Declared payload of {message_length} bits does not fit {available} available bits",
            declared_bits=message_length,
            available_bits=available,
        )

    payload = bits[LENGTH_PREFIX_BITS:LENGTH_PREFIX_BITS + message_length]
    return bits_to_text(payload)
