"""
Video Model
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from tubely.database import Base
from tubely.models.types import GUID


class Video(Base):
    """
    Video metadata table

    thumbnail_url and video_url are filled in by the upload endpoints and may
    only be changed by the owning user.
    """
    __tablename__ = "videos"

    video_id = Column(GUID, primary_key=True, default=uuid.uuid4)
    user_id = Column(GUID, nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    thumbnail_url = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Video(video_id={self.video_id}, user_id={self.user_id}, title={self.title})>"
