"""
ffprobe-backed video inspection
"""
from tubely.services.ffmpeg.aspect_ratio import (
    AspectRatio,
    AspectRatioService,
    classify_aspect_ratio,
    get_aspect_ratio_service,
    get_video_aspect_ratio,
)

__all__ = [
    "AspectRatio",
    "AspectRatioService",
    "classify_aspect_ratio",
    "get_aspect_ratio_service",
    "get_video_aspect_ratio",
]
