# file: src/module2_media_io/audio_extractor.py

"""
Audio extraction via ffmpeg.

Demuxes and transcodes the audio track to raw mono signed 16-bit
little-endian PCM at the decoder's sample rate.
"""

import logging
from typing import List, Optional

from module1_common.config import MediaConfig
from module1_common.errors import ExtractionUnavailableError
from .tools import resolve_binary, run_tool

logger = logging.getLogger(__name__)


class AudioExtractor:
    """Audio extraction service backed by ffmpeg."""

    def __init__(self, config: Optional[MediaConfig] = None, sample_rate: int = 44100):
        self.config = config or MediaConfig()
        self.sample_rate = sample_rate

    def build_command(self, ffmpeg: str, video_path: str) -> List[str]:
        return [
            ffmpeg, "-v", "error",
            "-i", str(video_path),
            "-vn",
            "-acodec", "pcm_s16le",
            "-ar", str(self.sample_rate),
            "-ac", "1",
            "-f", "s16le",
            "pipe:1",
        ]

    def extract(self, video_path: str) -> bytes:
        """
        Extract the audio track as raw PCM.

        Args:
            video_path: Input video file

        Returns:
            pcm: Mono s16le PCM bytes

        Raises:
            ExtractionUnavailableError: No audio stream, or ffmpeg missing/failed
        """
        ffmpeg = resolve_binary(self.config.ffmpeg_path)
        result = run_tool(
            self.build_command(ffmpeg, video_path),
            timeout=self.config.timeout_seconds,
            text=False,
        )

        if not result.stdout:
            raise ExtractionUnavailableError(f"No audio stream found in {video_path}")

        logger.info(f"Extracted {len(result.stdout) // 2} audio samples")
        return result.stdout
