# file: src/module1_common/__init__.py

"""
Module 1: Common Types

Configuration snapshot, per-channel result types and the exception
hierarchy used by every other module.
"""

from .config import (
    DecoderConfig,
    VisualConfig,
    AudioConfig,
    MetadataConfig,
    MediaConfig,
    OrchestrationConfig,
    load_config,
)
from .results import Channel, ChannelResult, FailureKind
from .errors import (
    StegDecodeError,
    InsufficientDataError,
    InvalidLengthError,
    ExtractionUnavailableError,
    MalformedTagError,
    ConfigurationError,
)

__all__ = [
    'DecoderConfig',
    'VisualConfig',
    'AudioConfig',
    'MetadataConfig',
    'MediaConfig',
    'OrchestrationConfig',
    'load_config',
    'Channel',
    'ChannelResult',
    'FailureKind',
    'StegDecodeError',
    'InsufficientDataError',
    'InvalidLengthError',
    'ExtractionUnavailableError',
    'MalformedTagError',
    'ConfigurationError',
]

__version__ = '1.0.0'
