# file: src/module4_visual_channel/testing_utils.py

"""
Testing utilities for the visual channel.

Builds PNG-shaped byte buffers with bits planted where the decoder reads
them. The buffers are not decodable images; only the byte layout the
decoder scans is reproduced.
"""

import struct
from typing import List, Optional

import numpy as np

from module1_common.config import VisualConfig

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# Non-carrier bytes have LSB 1, carrier bytes start from an even value
FILLER_BYTE = 0x43
CARRIER_BASE = 0x42


def build_frame(bits: np.ndarray, config: Optional[VisualConfig] = None) -> bytes:
    """
    Build a frame buffer that yields exactly ``bits`` when decoded.

    Layout:
        [signature:8][chunk length:4][marker:4][pad][body][trailer]

    The body starts marker_payload_offset bytes after the marker.

    Args:
        bits: 0/1 array, at most max_bits_per_frame long
        config: Visual parameters (defaults if None)

    Returns:
        Frame buffer bytes
    """
    config = config or VisualConfig()
    stride = config.byte_stride

    body = bytearray([FILLER_BYTE] * (len(bits) * stride))
    for k, bit in enumerate(bits):
        body[k * stride] = CARRIER_BASE | int(bit)

    marker = config.marker_bytes
    pad = bytes([FILLER_BYTE]) * max(config.marker_payload_offset - len(marker), 0)
    header = PNG_SIGNATURE + struct.pack('>I', len(body)) + marker + pad
    trailer = bytes([FILLER_BYTE]) * config.trailer_margin
    return header + bytes(body) + trailer


def build_frame_set(
    bits: np.ndarray,
    num_carriers: int,
    config: Optional[VisualConfig] = None
) -> List[bytes]:
    """
    Spread bits over ``num_carriers`` sampled frames.

    Frames between the sampled positions carry all-ones noise, which the
    decoder must skip.

    Returns:
        Ordered frame list of length (num_carriers - 1) * frame_interval + 1
    """
    config = config or VisualConfig()
    chunks = np.array_split(np.asarray(bits, dtype=np.uint8), num_carriers)

    frames = []
    noise = build_frame(np.ones(64, dtype=np.uint8), config)
    for index, chunk in enumerate(chunks):
        frames.append(build_frame(chunk, config))
        if index < num_carriers - 1:
            frames.extend([noise] * (config.frame_interval - 1))
    return frames
