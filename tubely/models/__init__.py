"""
Database Models
"""
from tubely.models.video import Video

__all__ = ["Video"]
