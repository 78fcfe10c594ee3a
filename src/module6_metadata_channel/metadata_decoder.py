# file: src/module6_metadata_channel/metadata_decoder.py

"""
Metadata Channel Decoder

Recovers a message stored as hex pairs in a container tag
(``comment`` by default), e.g. "48656c6c6f" -> "Hello".

Any tag that is not a clean even-length hex string is treated as
unrelated metadata written by another tool, not as a partial message.
"""

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from module1_common.config import MetadataConfig
from module1_common.errors import StegDecodeError, MalformedTagError
from module1_common.results import Channel, ChannelResult, FailureKind

logger = logging.getLogger(__name__)

_HEX_PAIRS = re.compile(r'(?:[0-9A-Fa-f]{2})*')


def lookup_tag(tags: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """
    Case-insensitive tag lookup.

    An exact-case match wins over other spellings.
    """
    if not tags:
        return None
    if name in tags:
        return tags[name]
    lowered = name.lower()
    for key, value in tags.items():
        if str(key).lower() == lowered:
            return value
    return None


def decode_hex_tag(value: str) -> str:
    """
    Decode hex byte pairs to text (one character per byte, code points 0-255).

    Raises:
        MalformedTagError: Odd length or non-hex characters
    """
    if len(value) % 2 != 0:
        raise MalformedTagError(f"Hex tag has odd length {len(value)}")
    if not _HEX_PAIRS.fullmatch(value):
        raise MalformedTagError("Hex tag contains non-hex characters")
    return bytes.fromhex(value).decode('latin-1')


@dataclass(frozen=True)
class MetadataRecord:
    """Informational container tags reported alongside the decoded message."""

    title: Optional[str] = None
    comment: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_tags(cls, tags: Optional[Mapping[str, str]]) -> "MetadataRecord":
        return cls(
            title=lookup_tag(tags, 'title'),
            comment=lookup_tag(tags, 'comment'),
            description=lookup_tag(tags, 'description'),
        )


class MetadataChannelDecoder:
    """Hex tag decoder for container metadata."""

    def __init__(self, config: Optional[MetadataConfig] = None):
        self.config = config or MetadataConfig()

    def decode(self, tags: Optional[Mapping[str, str]]) -> ChannelResult:
        """
        Recover the metadata-channel message.

        Args:
            tags: Container tag mapping from the metadata probe (None = no tags)

        Returns:
            ChannelResult for Channel.METADATA
        """
        value = lookup_tag(tags, self.config.tag)

        if not value:
            logger.debug(f"Metadata layer: no '{self.config.tag}' tag")
            return ChannelResult.failed(Channel.METADATA, FailureKind.NOT_PRESENT)

        try:
            message = decode_hex_tag(str(value))
        except StegDecodeError as e:
            logger.debug(f"Metadata layer: no data ({e.kind.value}): {e}")
            return ChannelResult.failed(Channel.METADATA, e.kind, detail=str(e))

        logger.debug(f"Metadata layer: recovered {len(message)} characters")
        return ChannelResult.decoded(Channel.METADATA, message, bits_collected=len(message) * 8)
