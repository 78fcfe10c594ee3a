# file: src/module6_metadata_channel/__init__.py

"""
Module 6: Metadata Channel

Hex-encoded container tag decoding.
"""

from .metadata_decoder import (
    MetadataChannelDecoder,
    MetadataRecord,
    decode_hex_tag,
    lookup_tag,
)

__all__ = [
    'MetadataChannelDecoder',
    'MetadataRecord',
    'decode_hex_tag',
    'lookup_tag',
]
