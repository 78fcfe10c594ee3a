# file: src/module3_bit_framing/testing_utils.py

"""
Testing utilities for bit framing.

Builds framed bit streams the way the embedder writes them. Used only in
test contexts; the decoder never frames messages.
"""

import struct
from typing import Optional

import numpy as np

from .framer import BITS_PER_CHAR


def frame_message(message: str, declared_bits: Optional[int] = None) -> np.ndarray:
    """
    Frame a message as [length:32][payload].

    Args:
        message: Text with code points 0-255
        declared_bits: Override for the length prefix (for malformed frames)

    Returns:
        bits: np.ndarray (32 + 8*len(message),) dtype uint8

    Example:
        >>> bits = frame_message("Hi")
        >>> len(bits)
        48
    """
    payload = message.encode('latin-1')
    if declared_bits is None:
        declared_bits = len(payload) * BITS_PER_CHAR

    data = struct.pack('>I', declared_bits) + payload
    return np.unpackbits(np.frombuffer(data, dtype=np.uint8), bitorder='big')


def to_bit_string(bits: np.ndarray) -> str:
    """Render a bit array as a '0'/'1' string."""
    return ''.join('1' if b else '0' for b in bits)
