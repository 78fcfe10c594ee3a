# file: src/module5_audio_channel/audio_decoder.py

"""
Audio Channel Decoder

Recovers the tone watermark from mono 16-bit PCM audio.

Demodulation Algorithm (per window of floor(sample_rate * bit_duration) samples):
    1. x[j] = pcm[j] / 32768
    2. t = j / sample_rate  (j restarts at 0 in every window)
    3. low  = sum(x[j] * sin(2*pi * (f * 0.5) * t))
    4. high = sum(x[j] * sin(2*pi * f * t))
    5. bit = 1 if |high| > |low| else 0

Where:
    - f = carrier_frequency (from config, default 18 Hz)
    - a trailing partial window is discarded, never padded
"""

import logging
from typing import Optional, Tuple

import numpy as np

from module1_common.config import AudioConfig
from module1_common.errors import StegDecodeError, InsufficientDataError
from module1_common.results import Channel, ChannelResult
from module3_bit_framing import unframe, LENGTH_PREFIX_BITS

logger = logging.getLogger(__name__)

PCM_FULL_SCALE = 32768.0


class AudioChannelDecoder:
    """
    Matched-filter demodulator for the two-tone audio watermark.

    All computation is deterministic: identical PCM input and
    configuration always yield identical bits.
    """

    def __init__(self, config: Optional[AudioConfig] = None):
        """
        Initialize audio decoder.

        Args:
            config: Audio channel parameters (defaults if None)
        """
        self.config = config or AudioConfig()
        self.samples_per_bit = self.config.samples_per_bit

        # Reference tones depend only on the local sample index, so they
        # are shared by every window
        t = np.arange(self.samples_per_bit, dtype=np.float64) / self.config.sample_rate
        self.low_reference = np.sin(2 * np.pi * self.config.low_frequency * t)
        self.high_reference = np.sin(2 * np.pi * self.config.carrier_frequency * t)

    def pcm_to_samples(self, pcm: bytes) -> np.ndarray:
        """
        Convert signed 16-bit little-endian PCM to floats in [-1, 1).

        Skips header_bytes at the start and ignores an odd trailing byte.
        """
        data = pcm[self.config.header_bytes:]
        usable = len(data) - (len(data) % 2)
        samples = np.frombuffer(data[:usable], dtype='<i2')
        return samples.astype(np.float64) / PCM_FULL_SCALE

    def window_samples(self, samples: np.ndarray) -> np.ndarray:
        """
        Split samples into full, non-overlapping windows.

        Returns:
            windows: (num_windows, samples_per_bit)
        """
        num_windows = len(samples) // self.samples_per_bit
        usable = num_windows * self.samples_per_bit
        return samples[:usable].reshape(num_windows, self.samples_per_bit)

    def correlate(self, windows: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Correlate each window against both reference tones.

        Returns:
            low_energy: (num_windows,)
            high_energy: (num_windows,)
        """
        low_energy = np.sum(windows * self.low_reference, axis=1)
        high_energy = np.sum(windows * self.high_reference, axis=1)
        return low_energy, high_energy

    def extract_bits(self, pcm: bytes) -> np.ndarray:
        """
        Demodulate the raw bit stream from PCM bytes.

        Args:
            pcm: Mono signed 16-bit little-endian PCM

        Returns:
            bits: np.ndarray (num_windows,) dtype uint8
        """
        samples = self.pcm_to_samples(pcm)
        windows = self.window_samples(samples)

        if len(windows) == 0:
            return np.array([], dtype=np.uint8)

        low_energy, high_energy = self.correlate(windows)
        bits = np.where(np.abs(high_energy) > np.abs(low_energy), 1, 0)

        logger.debug(
            f"Demodulated {len(bits)} windows of {self.samples_per_bit} samples "
            f"({len(samples) - windows.size} trailing samples dropped)"
        )
        return bits.astype(np.uint8)

    def decode(self, pcm: bytes) -> ChannelResult:
        """
        Recover the audio-channel message.

        Framing failures are reported in the result, never raised.

        Args:
            pcm: Mono signed 16-bit little-endian PCM

        Returns:
            ChannelResult for Channel.AUDIO
        """
        bits = self.extract_bits(pcm)

        try:
            if len(bits) < LENGTH_PREFIX_BITS:
                raise InsufficientDataError(
                    f"Only {len(bits)} bit windows in audio", available_bits=len(bits)
                )
            message = unframe(bits)
        except StegDecodeError as e:
            logger.debug(f"Audio layer: no data ({e.kind.value}): {e}")
            return ChannelResult.failed(Channel.AUDIO, e.kind, bits_collected=len(bits), detail=str(e))

        logger.debug(f"Audio layer: recovered {len(message)} characters")
        return ChannelResult.decoded(Channel.AUDIO, message, bits_collected=len(bits))
