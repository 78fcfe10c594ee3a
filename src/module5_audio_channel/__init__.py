# file: src/module5_audio_channel/__init__.py

"""
Module 5: Audio Channel

Two-tone matched-filter demodulation of the audio watermark.
"""

from .audio_decoder import AudioChannelDecoder, PCM_FULL_SCALE

__all__ = [
    'AudioChannelDecoder',
    'PCM_FULL_SCALE',
]
