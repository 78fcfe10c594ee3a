# file: src/module3_bit_framing/__init__.py

"""
Module 3: Bit Framing

Decodes the 32-bit length-prefixed framing used by the visual and audio
channels.

Public API:
    - unframe(bits) -> str
    - as_bit_array(bits) -> np.ndarray
    - read_length_prefix(bits) -> int
    - bits_to_text(bits) -> str
"""

from .framer import (
    unframe,
    as_bit_array,
    read_length_prefix,
    bits_to_text,
    LENGTH_PREFIX_BITS,
    BITS_PER_CHAR,
)
from module1_common.errors import InsufficientDataError, InvalidLengthError

__all__ = [
    'unframe',
    'as_bit_array',
    'read_length_prefix',
    'bits_to_text',
    'LENGTH_PREFIX_BITS',
    'BITS_PER_CHAR',
    'InsufficientDataError',
    'InvalidLengthError',
]
