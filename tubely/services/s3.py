"""
AWS S3 object storage
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Depends

from tubely.config import Settings, get_settings
from tubely.errors import StorageError
from tubely.services.assets import get_s3_asset_url

logger = logging.getLogger(__name__)


class S3Storage:
    """Uploads files to one bucket and builds their public URLs"""

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.bucket = settings.s3_bucket
        self.client = client or _boto_client(
            settings.s3_region,
            settings.s3_endpoint_url,
            settings.aws_access_key_id,
            settings.aws_secret_access_key,
        )

    @staticmethod
    def _normalize_key(key: str) -> str:
        return str(key).replace("\\", "/").lstrip("/")

    def upload_file(self, local_path: Path, key: str, content_type: Optional[str] = None) -> str:
        """
        Upload a local file to the bucket

        Args:
            local_path: File to upload
            key: Object key, e.g. "landscape/{video_id}.mp4"
            content_type: Stored as the object's Content-Type

        Returns:
            The normalized object key

        Raises:
            StorageError: If the upload fails
        """
        key = self._normalize_key(key)
        extra_args = {"ContentType": content_type} if content_type else None

        try:
            self.client.upload_file(str(local_path), self.bucket, key, ExtraArgs=extra_args)
        except (BotoCoreError, ClientError, S3UploadFailedError, OSError) as e:
            logger.error(f"S3 upload failed: bucket='{self.bucket}' key='{key}' error={e}")
            raise StorageError(f"Failed to upload {key} to object storage") from e

        logger.info(f"Uploaded to S3: s3://{self.bucket}/{key}")
        return key

    def object_url(self, key: str) -> str:
        return get_s3_asset_url(self.settings, self._normalize_key(key))


@lru_cache()
def _boto_client(
    region: str,
    endpoint_url: Optional[str],
    access_key_id: Optional[str],
    secret_access_key: Optional[str]
):
    """One boto3 client per distinct connection setting"""
    return boto3.client(
        "s3",
        region_name=region,
        endpoint_url=endpoint_url,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
    )


def get_s3_storage(settings: Settings = Depends(get_settings)) -> S3Storage:
    """
    Get S3 storage for the configured bucket

    Usage in FastAPI:
        @router.post("/upload")
        def upload(s3: S3Storage = Depends(get_s3_storage)):
            ...
    """
    return S3Storage(settings)
