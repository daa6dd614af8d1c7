"""
Video API Endpoints
"""
import logging
from typing import BinaryIO, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from tubely.api.deps import (
    authenticate,
    get_current_user_id,
    get_owned_video,
    parse_video_id,
    upload_size,
)
from tubely.config import Settings, get_settings
from tubely.database import get_db
from tubely.errors import ExternalToolError, StorageError
from tubely.schemas.video import VideoCreate, VideoResponse
from tubely.services import videos as video_service
from tubely.services.assets import VIDEO_MEDIA_TYPES, asset_filename
from tubely.services.ffmpeg import AspectRatioService, get_aspect_ratio_service
from tubely.services.s3 import S3Storage, get_s3_storage
from tubely.services.storage import StorageService, get_storage_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["videos"])

MAX_UPLOAD_SIZE = 1 << 30  # 1GB
VIDEO_MEDIA_TYPE = "video/mp4"


@router.post("/videos", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    payload: VideoCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create a draft video owned by the caller"""
    try:
        return video_service.create_video(db, user_id, payload.title, payload.description)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get("/videos", response_model=List[VideoResponse])
def list_videos(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """List the caller's videos, newest first"""
    return video_service.list_videos(db, user_id)


@router.get("/videos/{video_id}", response_model=VideoResponse)
def get_video(
    video_id: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Get video by ID

    - Returns 404 if video not found, 403 if it belongs to another user
    """
    video_uuid = parse_video_id(video_id)
    user_id = authenticate(request, settings)
    return get_owned_video(db, video_uuid, user_id)


def _store_video(
    storage: StorageService,
    prober: AspectRatioService,
    s3: S3Storage,
    source: BinaryIO,
    filename: str,
    content_type: str
) -> str:
    """
    Stage the upload on disk, classify it and push it to S3.

    Returns the object key. The staged file is removed on every path out.
    """
    with storage.temporary_upload(source, filename) as temp_path:
        aspect_ratio = prober.get_aspect_ratio(temp_path)
        key = f"{aspect_ratio.value}/{filename}"
        return s3.upload_file(temp_path, key, content_type)


@router.post("/video_upload/{video_id}", response_model=VideoResponse)
async def upload_video(
    video_id: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: StorageService = Depends(get_storage_service),
    prober: AspectRatioService = Depends(get_aspect_ratio_service),
    s3: S3Storage = Depends(get_s3_storage)
):
    """
    Upload the video file for a video

    - Requires a bearer token for the video's owner
    - Multipart field "video", max 1GB, video/mp4 only
    - Classifies the aspect ratio with ffprobe
    - Stores the file in S3 under {aspect_ratio}/{video_id}.mp4
    """
    video_uuid = parse_video_id(video_id)
    user_id = authenticate(request, settings)

    logger.info(f"Uploading video file for video {video_uuid} by user {user_id}")

    video = get_owned_video(db, video_uuid, user_id)

    async with request.form() as form:
        file = form.get("video")
        if not isinstance(file, UploadFile):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Video file missing"
            )

        if upload_size(file) > MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Video file size must be < 1GB"
            )

        media_type = file.content_type
        if not media_type:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing Content-Type for video"
            )
        # Exact match only, no parameters or case folding
        if media_type != VIDEO_MEDIA_TYPE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid Content-Type for video"
            )

        filename = asset_filename(video_uuid, VIDEO_MEDIA_TYPES[media_type])
        try:
            key = await run_in_threadpool(
                _store_video, storage, prober, s3, file.file, filename, media_type
            )
        except ExternalToolError as e:
            logger.error(f"ffprobe failed for video {video_uuid}: {e}")
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Could not read video dimensions: {e}"
            )
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e)
            )

    video.video_url = s3.object_url(key)

    try:
        video_service.update_video(db, video)
    except StorageError as e:
        logger.warning(f"Object {key} was uploaded but video {video_uuid} was not updated")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return video
