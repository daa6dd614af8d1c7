"""
Request checks shared by the API routers

Each helper raises HTTPException with the status code for the check that
failed, so routes can call them in order and fail fast.
"""
import logging
import os
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from tubely.auth import get_bearer_token, validate_jwt
from tubely.config import Settings, get_settings
from tubely.errors import UnauthorizedError
from tubely.models import Video
from tubely.services.videos import get_video

logger = logging.getLogger(__name__)


def parse_video_id(video_id: str) -> UUID:
    try:
        return UUID(video_id)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid video ID"
        )


def authenticate(request: Request, settings: Settings) -> UUID:
    """Return the caller's user id from the bearer token, or 401."""
    try:
        token = get_bearer_token(request.headers)
        return validate_jwt(token, settings.jwt_secret)
    except UnauthorizedError as e:
        logger.info(f"Rejected request to {request.url.path}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )


def get_current_user_id(request: Request, settings: Settings = Depends(get_settings)) -> UUID:
    """Dependency form of authenticate() for routes with no earlier checks"""
    return authenticate(request, settings)


def get_owned_video(db: Session, video_id: UUID, user_id: UUID) -> Video:
    """
    Load a video the caller is allowed to modify

    Raises:
        HTTPException: 404 if it does not exist, 403 if another user owns it
    """
    video = get_video(db, video_id)
    if not video:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Couldn't find video"
        )
    if video.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to edit this video"
        )
    return video


def upload_size(upload: UploadFile) -> int:
    """Size in bytes of a parsed multipart file"""
    if upload.size is not None:
        return upload.size
    # Older parsers don't record the size; measure the spooled file
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size
