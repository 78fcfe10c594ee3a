# file: src/module2_media_io/metadata_probe.py

"""
Container metadata probe via ffprobe.
"""

import json
import logging
from typing import Dict, List, Optional, Union

from module1_common.config import MediaConfig
from module1_common.errors import ExtractionUnavailableError
from .tools import resolve_binary, run_tool

logger = logging.getLogger(__name__)


def parse_format_tags(probe_output: Union[str, bytes]) -> Dict[str, str]:
    """
    Pull ``format.tags`` out of ffprobe JSON output.

    Returns an empty mapping when the container carries no tags.

    Raises:
        ExtractionUnavailableError: Output is not valid JSON or not shaped
                                    like ffprobe format output
    """
    try:
        data = json.loads(probe_output or "{}")
    except ValueError as e:
        # Covers JSONDecodeError and UnicodeDecodeError from bytes input
        raise ExtractionUnavailableError(f"Unreadable ffprobe output: {e}") from e

    if not isinstance(data, dict):
        raise ExtractionUnavailableError("Unreadable ffprobe output: expected a JSON object")

    format_section = data.get("format") or {}
    if not isinstance(format_section, dict):
        raise ExtractionUnavailableError("Unreadable ffprobe output: format is not an object")

    tags = format_section.get("tags") or {}
    if not isinstance(tags, dict):
        raise ExtractionUnavailableError("Unreadable ffprobe output: format.tags is not an object")
    return {str(key): str(value) for key, value in tags.items()}


class MetadataProbe:
    """Metadata probe service backed by ffprobe."""

    def __init__(self, config: Optional[MediaConfig] = None):
        self.config = config or MediaConfig()

    def build_command(self, ffprobe: str, video_path: str) -> List[str]:
        return [
            ffprobe, "-v", "quiet",
            "-print_format", "json",
            "-show_format",
            str(video_path),
        ]

    def probe(self, video_path: str) -> Dict[str, str]:
        """
        Read container-level tags.

        Args:
            video_path: Input video file

        Returns:
            tags: Tag name -> value (empty if none)

        Raises:
            ExtractionUnavailableError: ffprobe missing or failed
        """
        ffprobe = resolve_binary(self.config.ffprobe_path)
        result = run_tool(self.build_command(ffprobe, video_path), timeout=self.config.timeout_seconds)
        tags = parse_format_tags(result.stdout)
        logger.debug(f"Probed {len(tags)} container tags")
        return tags
