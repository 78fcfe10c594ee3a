# file: src/module2_media_io/tools.py

"""
Subprocess helpers for ffmpeg / ffprobe.
"""

import logging
import shutil
import subprocess
from typing import List, Optional

from module1_common.errors import ExtractionUnavailableError

logger = logging.getLogger(__name__)

STDERR_TAIL_CHARS = 500


def resolve_binary(name: str) -> str:
    """
    Resolve an executable name or path.

    Raises:
        ExtractionUnavailableError: If the tool cannot be found
    """
    path = shutil.which(name)
    if path is None:
        raise ExtractionUnavailableError(f"{name} is required but not found in PATH")
    return path


def _to_text(data: Optional[bytes]) -> str:
    # Tools echo container tags verbatim, which need not be UTF-8
    return (data or b'').decode('utf-8', errors='replace')


def run_tool(
    command: List[str],
    timeout: Optional[float] = None,
    text: bool = True
) -> subprocess.CompletedProcess:
    """
    Run an external tool and return the completed process.

    Output is always captured as bytes. With ``text`` set, stdout and
    stderr are decoded as UTF-8 with undecodable bytes replaced by U+FFFD.

    Args:
        command: Argument list, first element is the executable
        timeout: Seconds before the tool is killed (None = no limit)
        text: Decode stdout/stderr as text

    Returns:
        CompletedProcess with captured output

    Raises:
        ExtractionUnavailableError: Non-zero exit, timeout, or launch failure
    """
    logger.debug(f"Running: {' '.join(command)}")

    try:
        result = subprocess.run(command, capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ExtractionUnavailableError(f"{command[0]} timed out after {timeout}s") from e
    except OSError as e:
        raise ExtractionUnavailableError(f"Failed to launch {command[0]}: {e}") from e

    if result.returncode != 0:
        tail = _to_text(result.stderr).strip()[-STDERR_TAIL_CHARS:]
        logger.warning(f"{command[0]} exited with status {result.returncode}: {tail}")
        raise ExtractionUnavailableError(f"{command[0]} failed with status {result.returncode}")

    if text:
        result.stdout = _to_text(result.stdout)
        result.stderr = _to_text(result.stderr)
    return result
