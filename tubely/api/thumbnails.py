"""
Thumbnail API Endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from tubely.api.deps import authenticate, get_owned_video, parse_video_id, upload_size
from tubely.config import Settings, get_settings
from tubely.database import get_db
from tubely.errors import StorageError
from tubely.schemas.video import VideoResponse
from tubely.services.assets import (
    IMAGE_MEDIA_TYPES,
    asset_filename,
    get_asset_url,
    media_type_to_ext,
    normalize_media_type,
)
from tubely.services.storage import StorageService, get_storage_service
from tubely.services.videos import update_video

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["thumbnails"])

MAX_UPLOAD_SIZE = 10 << 20  # 10MB


@router.post("/thumbnail_upload/{video_id}", response_model=VideoResponse)
async def upload_thumbnail(
    video_id: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: StorageService = Depends(get_storage_service)
):
    """
    Upload a thumbnail image for a video

    - Requires a bearer token for the video's owner
    - Multipart field "thumbnail", max 10MB
    - JPEG, PNG, GIF or WebP only
    - Saves to assets_root/{video_id}{ext} and serves it under /assets
    """
    video_uuid = parse_video_id(video_id)
    user_id = authenticate(request, settings)

    logger.info(f"Uploading thumbnail for video {video_uuid} by user {user_id}")

    video = get_owned_video(db, video_uuid, user_id)

    async with request.form() as form:
        file = form.get("thumbnail")
        if not isinstance(file, UploadFile):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Thumbnail file missing"
            )

        if upload_size(file) > MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Thumbnail file size must be < 10MB"
            )

        media_type = normalize_media_type(file.content_type)
        if not media_type:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing Content-Type for thumbnail"
            )

        ext = media_type_to_ext(media_type, IMAGE_MEDIA_TYPES)
        if ext is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported Content-Type for thumbnail. Allowed: {', '.join(IMAGE_MEDIA_TYPES)}"
            )

        filename = asset_filename(video_uuid, ext)
        try:
            await run_in_threadpool(storage.save_asset, file.file, filename)
        except StorageError as e:
            logger.error(f"Thumbnail write failed for video {video_uuid}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save thumbnail"
            )
        storage.remove_other_variants(filename)

    video.thumbnail_url = get_asset_url(settings, filename)

    try:
        update_video(db, video)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return video
