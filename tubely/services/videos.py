"""
Video record persistence
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tubely.errors import StorageError
from tubely.models import Video

logger = logging.getLogger(__name__)


def get_video(db: Session, video_id: UUID) -> Optional[Video]:
    """Return the video with ``video_id`` or None."""
    return db.query(Video).filter(Video.video_id == video_id).first()


def list_videos(db: Session, user_id: UUID) -> List[Video]:
    """Return every video owned by ``user_id``, newest first."""
    return (
        db.query(Video)
        .filter(Video.user_id == user_id)
        .order_by(Video.created_at.desc())
        .all()
    )


def create_video(db: Session, user_id: UUID, title: str, description: Optional[str] = None) -> Video:
    """
    Insert a draft video with no thumbnail or video file yet.

    Raises:
        StorageError: If the insert fails
    """
    video = Video(user_id=user_id, title=title, description=description)
    db.add(video)
    _commit(db, f"Failed to create video for user {user_id}")
    db.refresh(video)
    return video


def update_video(db: Session, video: Video) -> Video:
    """
    Persist changes made to ``video``.

    Raises:
        StorageError: If the commit fails; the session is rolled back
    """
    db.add(video)
    _commit(db, f"Failed to update video {video.video_id}")
    db.refresh(video)
    return video


def _commit(db: Session, message: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{message}: {e}")
        raise StorageError(message) from e
