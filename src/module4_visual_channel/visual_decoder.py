# file: src/module4_visual_channel/visual_decoder.py

"""
Visual Channel Decoder

Recovers the pixel-LSB payload from rasterized video frames.

Extraction Algorithm (must match the embedder byte for byte):
    1. Sample frames 0, k, 2k, ... where k = frame_interval
    2. In each sampled frame, find the compressed-data chunk tag
       (PNG 'IDAT') after the 8-byte file signature
    3. Starting 8 bytes after the tag position, take the LSB of every
       7th byte
    4. Stop after 10,000 bits or when fewer than 100 bytes remain
    5. Concatenate per-frame bits in order and unframe
"""

import logging
from typing import Optional, Sequence

import numpy as np

from module1_common.config import VisualConfig
from module1_common.errors import StegDecodeError, InsufficientDataError
from module1_common.results import Channel, ChannelResult
from module3_bit_framing import unframe, LENGTH_PREFIX_BITS

logger = logging.getLogger(__name__)

# Type alias
FrameBuffer = bytes  # Encoded still image (PNG file contents)


class VisualChannelDecoder:
    """
    Pixel-LSB decoder operating on encoded frame buffers.

    Reads raw bytes of each frame file; it does not decode the image.
    """

    def __init__(self, config: Optional[VisualConfig] = None):
        """
        Initialize visual decoder.

        Args:
            config: Visual channel parameters (defaults if None)
        """
        self.config = config or VisualConfig()
        self.marker = self.config.marker_bytes

    def sample_frames(self, frames: Sequence[FrameBuffer]) -> Sequence[FrameBuffer]:
        """
        Select every frame_interval-th frame, starting with the first.

        Slices the input, so a lazily loaded sequence stays lazy.
        """
        return frames[::self.config.frame_interval]

    def locate_payload_start(self, buffer: FrameBuffer) -> int:
        """
        Find where embedded bits start in a frame buffer.

        Args:
            buffer: Encoded frame bytes

        Returns:
            Offset of the first payload byte, or -1 if the marker is absent
            or the offset falls outside the buffer
        """
        # The tag must end before the last byte of the buffer
        position = buffer.find(self.marker, self.config.signature_length, len(buffer) - 1)
        if position == -1:
            return -1

        start = position + self.config.marker_payload_offset
        if start >= len(buffer):
            return -1
        return start

    def extract_frame_bits(self, buffer: FrameBuffer) -> np.ndarray:
        """
        Read LSBs of every byte_stride-th byte from one frame.

        Args:
            buffer: Encoded frame bytes

        Returns:
            bits: np.ndarray (N,) dtype uint8, N <= max_bits_per_frame
        """
        start = self.locate_payload_start(buffer)
        if start == -1:
            return np.array([], dtype=np.uint8)

        stop = len(buffer) - self.config.trailer_margin
        if stop <= start:
            return np.array([], dtype=np.uint8)

        data = np.frombuffer(buffer, dtype=np.uint8)
        positions = np.arange(start, stop, self.config.byte_stride)[:self.config.max_bits_per_frame]

        return data[positions] & 1

    def extract_bits(self, frames: Sequence[FrameBuffer]) -> np.ndarray:
        """
        Build the channel bit stream from all sampled frames.

        Args:
            frames: Ordered frame buffers (temporal order)

        Returns:
            bits: Concatenated bits in sampled-frame order
        """
        sampled = self.sample_frames(frames)
        logger.debug(f"Analyzing {len(sampled)} of {len(frames)} frames")

        per_frame_bits = []
        for frame_idx, buffer in enumerate(sampled):
            bits = self.extract_frame_bits(buffer)
            if len(bits) == 0:
                logger.debug(f"  Sampled frame {frame_idx}: no data region")
            per_frame_bits.append(bits)

        if not per_frame_bits:
            return np.array([], dtype=np.uint8)
        return np.concatenate(per_frame_bits).astype(np.uint8)

    def decode(self, frames: Sequence[FrameBuffer]) -> ChannelResult:
        """
        Recover the visual-channel message.

        Framing failures are reported in the result, never raised.

        Args:
            frames: Ordered frame buffers

        Returns:
            ChannelResult for Channel.VISUAL
        """
        bits = self.extract_bits(frames)

        try:
            if len(bits) < LENGTH_PREFIX_BITS:
                raise InsufficientDataError(
                    f"Only {len(bits)} bits found in frames", available_bits=len(bits)
                )
            message = unframe(bits)
        except StegDecodeError as e:
            logger.debug(f"Visual layer: no data ({e.kind.value}): {e}")
            return ChannelResult.failed(Channel.VISUAL, e.kind, bits_collected=len(bits), detail=str(e))

        logger.debug(f"Visual layer: recovered {len(message)} characters")
        return ChannelResult.decoded(Channel.VISUAL, message, bits_collected=len(bits))
