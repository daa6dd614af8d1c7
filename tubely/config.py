"""
Application Configuration
"""
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App
    app_name: str = "Tubely"
    app_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./tubely.db"

    # Auth
    jwt_secret: str = "change-me"

    # Local storage
    assets_root: str = "./assets"
    temp_root: str = str(Path(tempfile.gettempdir()) / "tubely")
    public_base_url: str = "http://localhost:8091"

    # S3
    s3_bucket: str = "tubely-videos"
    s3_region: str = "us-east-1"
    s3_endpoint_url: Optional[str] = None
    s3_public_base_url: Optional[str] = None  # e.g. a CloudFront distribution
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    # ffprobe
    ffprobe_path: str = "ffprobe"
    ffprobe_timeout: int = 30

    # API
    cors_origins: list = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = False
        frozen = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
