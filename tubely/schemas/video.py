"""
Video Schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class VideoCreate(BaseModel):
    """Draft video creation request"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class VideoResponse(BaseModel):
    """Video response schema"""
    video_id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
