"""
FFprobe Installation Verification Utility

Checks at startup and from /health that the ffprobe binary used for aspect
ratio classification is available, with a clear message when it is not.
"""
import logging
import shutil
import subprocess
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class FFprobeNotFoundError(Exception):
    """Raised when ffprobe is not installed or not on PATH"""
    pass


def check_ffprobe_installation(ffprobe_path: str = "ffprobe") -> Dict[str, str]:
    """
    Check that ffprobe is installed.

    Args:
        ffprobe_path: Binary name or absolute path from settings

    Returns:
        Dict with 'ffprobe_path' and 'version'

    Raises:
        FFprobeNotFoundError: ffprobe could not be found
    """
    resolved = shutil.which(ffprobe_path)
    if not resolved:
        raise FFprobeNotFoundError(
            f"ffprobe not found ({ffprobe_path}).\n"
            "Install ffmpeg, which ships ffprobe:\n"
            "1. apt-get install ffmpeg (Debian/Ubuntu)\n"
            "2. brew install ffmpeg (macOS)\n"
            "3. or set FFPROBE_PATH to the binary location"
        )

    version = get_ffprobe_version(resolved)

    result = {
        "ffprobe_path": resolved,
        "version": version or "Unknown"
    }

    logger.info(f"ffprobe check complete: {result}")
    return result


def get_ffprobe_version(ffprobe_path: str = "ffprobe") -> Optional[str]:
    """
    Return the ffprobe version line.

    Returns:
        Version string (e.g. "ffprobe version 6.1.1") or None
    """
    try:
        result = subprocess.run(
            [ffprobe_path, "-version"],
            capture_output=True,
            text=True,
            timeout=10
        )
        if result.returncode == 0:
            return result.stdout.split('\n')[0]
        return None
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning(f"ffprobe version check failed: {e}")
        return None
