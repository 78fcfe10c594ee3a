# file: src/module1_common/errors.py

"""
Exception hierarchy shared by all decoding modules.

Every recoverable error carries a ``kind`` so channel decoders can turn it
into a ChannelResult without inspecting exception types.
"""

from .results import FailureKind


class StegDecodeError(Exception):
    """Base exception for all decoding errors."""

    kind: FailureKind = None


class InsufficientDataError(StegDecodeError):
    """Raised when a bit stream is too short to hold a length prefix."""

    kind = FailureKind.INSUFFICIENT_DATA

    def __init__(self, message: str, available_bits: int = None):
        super().__init__(message)
        self.available_bits = available_bits


class InvalidLengthError(StegDecodeError):
    """Raised when the length prefix is zero or exceeds the payload."""

    kind = FailureKind.INVALID_LENGTH

    def __init__(self, message: str, declared_bits: int = None, available_bits: int = None):
        super().__init__(message)
        self.declared_bits = declared_bits
        self.available_bits = available_bits


class ExtractionUnavailableError(StegDecodeError):
    """Raised when an external extraction step (ffmpeg/ffprobe) fails."""

    kind = FailureKind.EXTRACTION_UNAVAILABLE


class MalformedTagError(StegDecodeError):
    """Raised when a metadata tag is not a clean hex string."""

    kind = FailureKind.MALFORMED_TAG


class ConfigurationError(StegDecodeError, ValueError):
    """Raised when decoder configuration is invalid."""
    pass
