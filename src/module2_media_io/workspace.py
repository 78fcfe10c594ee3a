# file: src/module2_media_io/workspace.py

"""
Temporary staging directory for extracted frames.
"""

import logging
import os
import shutil
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)


class MediaWorkspace:
    """
    Working directory with a ``frames/`` subdirectory.

    Used as a context manager; the directory is removed on exit unless
    ``keep`` is set.

    Example:
        >>> with MediaWorkspace() as ws:
        ...     frames = extractor.extract(video_path, ws.frames_dir)
    """

    def __init__(self, base_dir: Optional[str] = None, keep: bool = False):
        """
        Args:
            base_dir: Parent directory for the workspace (None = system temp)
            keep: Leave files on disk after exit
        """
        self.base_dir = base_dir
        self.keep = keep
        self.root: Optional[str] = None

    @property
    def frames_dir(self) -> str:
        return os.path.join(self.root, "frames")

    def create(self) -> "MediaWorkspace":
        if self.base_dir is not None:
            os.makedirs(self.base_dir, exist_ok=True)
        self.root = tempfile.mkdtemp(prefix="stegvid_", dir=self.base_dir)
        os.makedirs(self.frames_dir, exist_ok=True)
        logger.debug(f"Created workspace {self.root}")
        return self

    def cleanup(self) -> None:
        if self.root is None:
            return
        if self.keep:
            logger.info(f"Keeping workspace {self.root}")
            return
        shutil.rmtree(self.root, ignore_errors=True)
        logger.debug(f"Removed workspace {self.root}")
        self.root = None

    def __enter__(self) -> "MediaWorkspace":
        return self.create()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
