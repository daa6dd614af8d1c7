"""
Video Aspect Ratio Classification

Reads the pixel dimensions of a video's first stream with ffprobe and sorts
the video into landscape, portrait or other. The label becomes the prefix of
the object storage key.
"""
import json
import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import Tuple, Union

from fastapi import Depends

from tubely.config import Settings, get_settings
from tubely.errors import ExternalToolError

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 30


class AspectRatio(str, Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    OTHER = "other"


def classify_aspect_ratio(width: int, height: int) -> AspectRatio:
    """
    Classify frame dimensions.

    Each side is scaled by 16/9 and compared against the other side:
    1920x1080 is landscape, 1080x1920 is portrait, 640x480 is other.
    """
    adj_width = (16 * width) // 9
    adj_height = (16 * height) // 9

    if width == adj_height:
        return AspectRatio.LANDSCAPE
    if height == adj_width:
        return AspectRatio.PORTRAIT
    return AspectRatio.OTHER


def probe_dimensions(
    file_path: Union[str, Path],
    ffprobe_path: str = "ffprobe",
    timeout: float = DEFAULT_PROBE_TIMEOUT
) -> Tuple[int, int]:
    """
    Run ffprobe against a file and return (width, height) of the first
    video stream.

    Raises:
        ExternalToolError: ffprobe missing, timed out, exited non-zero, or
            printed no usable stream dimensions
    """
    cmd = [
        ffprobe_path,
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=width,height",
        "-of", "json",
        str(file_path),
    ]

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        raise ExternalToolError(f"ffprobe timed out after {timeout}s")
    except OSError as e:
        raise ExternalToolError(f"Failed to run ffprobe: {e}")

    if result.returncode != 0:
        raise ExternalToolError(result.stderr.strip() or f"ffprobe exited with code {result.returncode}")

    try:
        parsed = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ExternalToolError(f"Malformed ffprobe output: {e}")

    streams = parsed.get("streams") if isinstance(parsed, dict) else None
    if not isinstance(streams, list) or not streams or not isinstance(streams[0], dict):
        raise ExternalToolError("Stream data not found.")

    width = streams[0].get("width")
    height = streams[0].get("height")
    if not width or not height:
        raise ExternalToolError("Missing stream aspect ratio parameter.")

    try:
        return int(width), int(height)
    except (TypeError, ValueError):
        raise ExternalToolError(f"Invalid stream dimensions: {width!r}x{height!r}")


def get_video_aspect_ratio(
    file_path: Union[str, Path],
    ffprobe_path: str = "ffprobe",
    timeout: float = DEFAULT_PROBE_TIMEOUT
) -> AspectRatio:
    """Probe a video file and classify its aspect ratio."""
    width, height = probe_dimensions(file_path, ffprobe_path, timeout)
    aspect_ratio = classify_aspect_ratio(width, height)
    logger.info(f"{Path(file_path).name}: {width}x{height} -> {aspect_ratio.value}")
    return aspect_ratio


class AspectRatioService:
    """Aspect ratio classification using the configured ffprobe binary"""

    def __init__(self, ffprobe_path: str = "ffprobe", timeout: float = DEFAULT_PROBE_TIMEOUT):
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout

    def get_aspect_ratio(self, file_path: Union[str, Path]) -> AspectRatio:
        return get_video_aspect_ratio(file_path, self.ffprobe_path, self.timeout)


def get_aspect_ratio_service(settings: Settings = Depends(get_settings)) -> AspectRatioService:
    """
    Get aspect ratio service instance

    Usage in FastAPI:
        @router.post("/upload")
        def upload(prober: AspectRatioService = Depends(get_aspect_ratio_service)):
            ...
    """
    return AspectRatioService(settings.ffprobe_path, settings.ffprobe_timeout)
