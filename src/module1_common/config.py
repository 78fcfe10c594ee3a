# file: src/module1_common/config.py

"""
Decoder configuration.

Configuration is read from YAML into a plain dictionary, merged over the
packaged ``default_config.yaml`` and then frozen into a DecoderConfig
snapshot. A snapshot is shared by every channel of one decode run.

Example:
    >>> config = load_config()
    >>> config.visual.frame_interval
    10
    >>> config = DecoderConfig.from_dict({'audio': {'sample_rate': 48000}})
"""

import copy
import logging
import math
import os
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")


# =============================================================================
# Configuration sections
# =============================================================================

@dataclass(frozen=True)
class VisualConfig:
    """Pixel LSB channel parameters."""

    frame_interval: int = 10
    byte_stride: int = 7
    max_bits_per_frame: int = 10000
    trailer_margin: int = 100
    signature_length: int = 8
    data_marker: str = "IDAT"
    marker_payload_offset: int = 8

    def __post_init__(self):
        for name in ("frame_interval", "byte_stride", "max_bits_per_frame"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"visual.{name} must be positive, got {getattr(self, name)}")
        for name in ("trailer_margin", "signature_length", "marker_payload_offset"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"visual.{name} must be non-negative, got {getattr(self, name)}")
        try:
            marker = self.data_marker.encode("ascii")
        except (AttributeError, UnicodeEncodeError) as e:
            raise ConfigurationError(f"visual.data_marker must be ASCII text: {self.data_marker!r}") from e
        if len(marker) != 4:
            raise ConfigurationError(f"visual.data_marker must be 4 bytes, got {self.data_marker!r}")

    @property
    def marker_bytes(self) -> bytes:
        return self.data_marker.encode("ascii")


@dataclass(frozen=True)
class AudioConfig:
    """Tone watermark channel parameters."""

    sample_rate: int = 44100
    bit_duration: float = 0.1
    carrier_frequency: float = 18.0
    low_tone_ratio: float = 0.5
    header_bytes: int = 0

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ConfigurationError(f"audio.sample_rate must be positive, got {self.sample_rate}")
        if self.bit_duration <= 0:
            raise ConfigurationError(f"audio.bit_duration must be positive, got {self.bit_duration}")
        if self.carrier_frequency <= 0:
            raise ConfigurationError(
                f"audio.carrier_frequency must be positive, got {self.carrier_frequency}"
            )
        if not (0 < self.low_tone_ratio < 1):
            raise ConfigurationError(f"audio.low_tone_ratio must be in (0, 1), got {self.low_tone_ratio}")
        if self.header_bytes < 0:
            raise ConfigurationError(f"audio.header_bytes must be non-negative, got {self.header_bytes}")
        if self.samples_per_bit == 0:
            raise ConfigurationError(
                f"audio window is empty: sample_rate={self.sample_rate}, "
                f"bit_duration={self.bit_duration}"
            )

    @property
    def samples_per_bit(self) -> int:
        return int(math.floor(self.sample_rate * self.bit_duration))

    @property
    def low_frequency(self) -> float:
        return self.carrier_frequency * self.low_tone_ratio


@dataclass(frozen=True)
class MetadataConfig:
    """Container tag channel parameters."""

    tag: str = "comment"

    def __post_init__(self):
        if not self.tag:
            raise ConfigurationError("metadata.tag must not be empty")


@dataclass(frozen=True)
class MediaConfig:
    """External tool settings for frame/audio/metadata extraction."""

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    extraction_fps: int = 30
    work_dir: Optional[str] = None
    keep_workspace: bool = False
    timeout_seconds: Optional[float] = None

    def __post_init__(self):
        if self.extraction_fps <= 0:
            raise ConfigurationError(f"media.extraction_fps must be positive, got {self.extraction_fps}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationError(
                f"media.timeout_seconds must be positive or null, got {self.timeout_seconds}"
            )


@dataclass(frozen=True)
class OrchestrationConfig:
    """Channel scheduling."""

    parallel: bool = False
    max_workers: int = 3

    def __post_init__(self):
        if self.max_workers <= 0:
            raise ConfigurationError(f"orchestration.max_workers must be positive, got {self.max_workers}")


_SECTIONS = {
    "visual": VisualConfig,
    "audio": AudioConfig,
    "metadata": MetadataConfig,
    "media": MediaConfig,
    "orchestration": OrchestrationConfig,
}


@dataclass(frozen=True)
class DecoderConfig:
    """Immutable configuration snapshot for one decode operation."""

    visual: VisualConfig = field(default_factory=VisualConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    media: MediaConfig = field(default_factory=MediaConfig)
    orchestration: OrchestrationConfig = field(default_factory=OrchestrationConfig)

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "DecoderConfig":
        """
        Build a snapshot from a nested configuration dictionary.

        Missing sections and keys take their defaults.

        Args:
            config: Dictionary with optional 'visual', 'audio', 'metadata',
                    'media' and 'orchestration' sections

        Returns:
            DecoderConfig

        Raises:
            ConfigurationError: On unknown sections/keys or invalid values
        """
        config = config or {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(config).__name__}")

        unknown = set(config) - set(_SECTIONS)
        if unknown:
            raise ConfigurationError(f"Unknown configuration sections: {sorted(unknown)}")

        sections = {}
        for name, section_cls in _SECTIONS.items():
            values = config.get(name) or {}
            if not isinstance(values, dict):
                raise ConfigurationError(f"Section '{name}' must be a mapping")
            try:
                sections[name] = section_cls(**values)
            except TypeError as e:
                raise ConfigurationError(f"Invalid keys in section '{name}': {e}") from e

        return cls(**sections)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# Loading
# =============================================================================

def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return data or {}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_default_dict() -> Dict[str, Any]:
    """
    Load the packaged defaults as a dictionary.

    Falls back to the dataclass defaults if the packaged file is missing.
    """
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return _read_yaml(DEFAULT_CONFIG_PATH)
    logger.warning(f"Default config not found at {DEFAULT_CONFIG_PATH}, using built-in defaults")
    return DecoderConfig().to_dict()


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> DecoderConfig:
    """
    Load configuration from YAML.

    Args:
        config_path: User YAML file merged over the defaults (None = defaults only)
        overrides: Extra dictionary merged last (e.g. from CLI flags)

    Returns:
        DecoderConfig snapshot

    Raises:
        ConfigurationError: If the user file cannot be read or parsed,
                            or values are invalid
    """
    config = load_default_dict()

    if config_path is not None:
        try:
            user_config = _read_yaml(config_path)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load configuration from {config_path}: {e}") from e
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
        config = _merge(config, user_config)
        logger.info(f"Loaded configuration from {config_path}")

    if overrides:
        config = _merge(config, overrides)

    return DecoderConfig.from_dict(config)
