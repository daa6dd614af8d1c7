"""
Asset naming helpers

Maps declared media types to file extensions and builds the on-disk paths
and public URLs for uploaded assets. Only media types listed here are
accepted; anything else is rejected by the upload endpoints.
"""
from typing import Dict, Optional
from uuid import UUID

from tubely.config import Settings

IMAGE_MEDIA_TYPES: Dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

VIDEO_MEDIA_TYPES: Dict[str, str] = {
    "video/mp4": ".mp4",
}

ASSETS_URL_PATH = "/assets"


def normalize_media_type(content_type: Optional[str]) -> str:
    """
    Strip parameters and case from a Content-Type value.

    >>> normalize_media_type("Image/PNG; charset=binary")
    'image/png'
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def media_type_to_ext(media_type: str, allowed: Dict[str, str]) -> Optional[str]:
    """Return the extension for ``media_type`` or None when it is not allowed."""
    return allowed.get(normalize_media_type(media_type))


def asset_filename(video_id: UUID, ext: str) -> str:
    return f"{video_id}{ext}"


def get_asset_url(settings: Settings, filename: str) -> str:
    """Public URL for a file served from ``assets_root``."""
    return f"{settings.public_base_url.rstrip('/')}{ASSETS_URL_PATH}/{filename}"


def get_s3_asset_url(settings: Settings, key: str) -> str:
    """
    Public URL for an object in the configured bucket.

    Uses ``s3_public_base_url`` (a CDN in front of the bucket) when set,
    otherwise the virtual-hosted S3 URL.
    """
    if settings.s3_public_base_url:
        return f"{settings.s3_public_base_url.rstrip('/')}/{key}"
    return f"https://{settings.s3_bucket}.s3.{settings.s3_region}.amazonaws.com/{key}"
