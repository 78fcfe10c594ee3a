# file: src/module2_media_io/frame_extractor.py

"""
Frame extraction via ffmpeg.

Rasterizes a video to PNG stills at a fixed frame rate. Frames are handed
out as a path-backed sequence, so a frame file is only read when the
caller indexes it.
"""

import glob
import logging
import os
from collections.abc import Sequence
from typing import List, Optional

from module1_common.config import MediaConfig
from module1_common.errors import ExtractionUnavailableError
from .tools import resolve_binary, run_tool

logger = logging.getLogger(__name__)

FRAME_PATTERN = "frame_%05d.png"


class FrameSequence(Sequence):
    """
    Ordered frame files read on access.

    Slicing returns another FrameSequence without touching the disk;
    indexing returns the file contents.
    """

    def __init__(self, paths: List[str]):
        self.paths = list(paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return FrameSequence(self.paths[index])
        with open(self.paths[index], 'rb') as f:
            return f.read()

    def __repr__(self) -> str:
        return f"FrameSequence({len(self.paths)} frames)"


class FrameExtractor:
    """Frame extraction service backed by ffmpeg."""

    def __init__(self, config: Optional[MediaConfig] = None):
        self.config = config or MediaConfig()

    def build_command(self, ffmpeg: str, video_path: str, frames_dir: str) -> List[str]:
        return [
            ffmpeg, "-v", "error", "-y",
            "-i", str(video_path),
            "-vf", f"fps={self.config.extraction_fps}",
            os.path.join(frames_dir, FRAME_PATTERN),
        ]

    def extract(self, video_path: str, frames_dir: str) -> FrameSequence:
        """
        Extract frames from a video.

        Args:
            video_path: Input video file
            frames_dir: Existing directory that receives the PNG files

        Returns:
            frames: PNG files in temporal order, read lazily; valid while
                    frames_dir exists

        Raises:
            ExtractionUnavailableError: If ffmpeg is missing, fails, or
                                        produces no frames
        """
        ffmpeg = resolve_binary(self.config.ffmpeg_path)
        run_tool(
            self.build_command(ffmpeg, video_path, frames_dir),
            timeout=self.config.timeout_seconds,
        )

        # Zero-padded names sort in frame order
        paths = sorted(glob.glob(os.path.join(frames_dir, "frame_*.png")))
        if not paths:
            raise ExtractionUnavailableError(f"No frames extracted from {video_path}")

        logger.info(f"Extracted {len(paths)} frames")
        return FrameSequence(paths)
