# file: src/module2_media_io/__init__.py

"""
Module 2: Media I/O

External collaborators that turn a video file into per-channel raw
inputs: lazily read PNG frames, raw PCM audio and container tags. All work is
delegated to ffmpeg/ffprobe; this module only stages files and parses
tool output.

Failures raise ExtractionUnavailableError, which the orchestrator maps
to "no result" for the affected channel.
"""

from .workspace import MediaWorkspace
from .frame_extractor import FrameExtractor, FrameSequence
from .audio_extractor import AudioExtractor
from .metadata_probe import MetadataProbe, parse_format_tags
from .tools import resolve_binary, run_tool

__all__ = [
    'MediaWorkspace',
    'FrameExtractor',
    'FrameSequence',
    'AudioExtractor',
    'MetadataProbe',
    'parse_format_tags',
    'resolve_binary',
    'run_tool',
]
