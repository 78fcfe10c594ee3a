# file: src/module5_audio_channel/testing_utils.py

"""
Testing utilities for the audio channel.

Synthesizes PCM that carries a tone watermark. Used only in tests.
"""

from typing import Optional

import numpy as np

from module1_common.config import AudioConfig


def synthesize_watermark(
    bits: np.ndarray,
    config: Optional[AudioConfig] = None,
    amplitude: float = 0.5,
    trailing_samples: int = 0
) -> bytes:
    """
    Render bits as consecutive tone windows in 16-bit PCM.

    Bit 1 windows carry the carrier tone, bit 0 windows the low tone.

    Args:
        bits: 0/1 array
        config: Audio parameters (defaults if None)
        amplitude: Peak amplitude in [0, 1)
        trailing_samples: Extra silent samples appended after the last window

    Returns:
        pcm: Signed 16-bit little-endian mono PCM bytes
    """
    config = config or AudioConfig()
    n = config.samples_per_bit
    t = np.arange(n, dtype=np.float64) / config.sample_rate

    high = amplitude * np.sin(2 * np.pi * config.carrier_frequency * t)
    low = amplitude * np.sin(2 * np.pi * config.low_frequency * t)

    windows = [high if bit else low for bit in bits]
    windows.append(np.zeros(trailing_samples))
    signal = np.concatenate(windows)

    pcm = np.round(signal * 32767).astype('<i2')
    return pcm.tobytes()


def silent_pcm(num_samples: int) -> bytes:
    """All-zero PCM of the given length."""
    return np.zeros(num_samples, dtype='<i2').tobytes()
