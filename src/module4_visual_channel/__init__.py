# file: src/module4_visual_channel/__init__.py

"""
Module 4: Visual Channel

Pixel-LSB extraction from rasterized frames.
"""

from .visual_decoder import VisualChannelDecoder, FrameBuffer

__all__ = [
    'VisualChannelDecoder',
    'FrameBuffer',
]
