# file: src/module1_common/results.py

"""
Per-channel result types.

A ChannelResult with ``message=None`` means "no valid data recovered";
an empty string is a valid (zero-length) decoded message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Channel(str, Enum):
    """The three embedding media."""

    VISUAL = "visual"
    AUDIO = "audio"
    METADATA = "metadata"


class FailureKind(str, Enum):
    """Why a channel produced no message."""

    INSUFFICIENT_DATA = "insufficient_data"
    INVALID_LENGTH = "invalid_length"
    EXTRACTION_UNAVAILABLE = "extraction_unavailable"
    MALFORMED_TAG = "malformed_tag"
    NOT_PRESENT = "not_present"


@dataclass(frozen=True)
class ChannelResult:
    """Outcome of one channel decode attempt."""

    channel: Channel
    message: Optional[str] = None
    failure: Optional[FailureKind] = None
    bits_collected: int = 0
    detail: Optional[str] = None

    @classmethod
    def decoded(cls, channel: Channel, message: str, bits_collected: int = 0) -> "ChannelResult":
        return cls(channel=channel, message=message, bits_collected=bits_collected)

    @classmethod
    def failed(
        cls,
        channel: Channel,
        failure: FailureKind,
        bits_collected: int = 0,
        detail: Optional[str] = None
    ) -> "ChannelResult":
        return cls(
            channel=channel,
            failure=failure,
            bits_collected=bits_collected,
            detail=detail,
        )

    @property
    def ok(self) -> bool:
        return self.message is not None
