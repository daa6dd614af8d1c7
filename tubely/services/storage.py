"""
Local Storage Service

Handles file operations for served assets (thumbnails) and for temporary
copies of uploaded videos awaiting transfer to object storage.
"""
import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from fastapi import Depends

from tubely.config import Settings, get_settings
from tubely.errors import StorageError

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


class StorageService:
    """
    File storage service for local directories

    Directory structure:
    - assets_root/: files served publicly under /assets
    - temp_root/: short-lived uploads, removed once processed
    """

    def __init__(self, assets_root: str, temp_root: str):
        self.assets_path = Path(assets_root)
        self.temp_path = Path(temp_root)

        self._ensure_directories()

    def _ensure_directories(self):
        """Create storage directories if they don't exist"""
        for path in [self.assets_path, self.temp_path]:
            path.mkdir(parents=True, exist_ok=True)

    def save_asset(self, source: BinaryIO, filename: str) -> Path:
        """
        Write an uploaded file into the assets directory

        Args:
            source: File object positioned at the start of the content
            filename: Target file name, e.g. "{video_id}.png"

        Returns:
            Path of the written file

        Raises:
            StorageError: If the write fails
        """
        return self._write(source, self.assets_path / filename)

    def remove_other_variants(self, filename: str) -> int:
        """
        Delete assets sharing a stem with ``filename`` but not its extension

        A thumbnail re-uploaded as PNG replaces an earlier JPEG of the same
        video this way.

        Returns:
            Number of files deleted
        """
        keep = Path(filename)
        removed = 0
        for path in self.assets_path.glob(f"{keep.stem}.*"):
            if path.name != keep.name and path.stem == keep.stem and self.delete_file(path):
                removed += 1
        return removed

    @contextmanager
    def temporary_upload(self, source: BinaryIO, filename: str) -> Iterator[Path]:
        """
        Write an upload to the temp directory for the duration of a block

        The file is deleted when the block exits, whether it returns or
        raises.

        Usage:
            with storage.temporary_upload(upload.file, "abc.mp4") as path:
                probe(path)
        """
        path = self._write(source, self.temp_path / filename)
        try:
            yield path
        finally:
            self.delete_file(path)

    def delete_file(self, file_path: Path) -> bool:
        """
        Delete a file from storage

        Returns:
            True if a file was deleted, False if it did not exist or could
            not be removed
        """
        path = Path(file_path)
        try:
            if path.is_file():
                path.unlink()
                return True
            return False
        except OSError as e:
            logger.warning(f"Error deleting file {path}: {e}")
            return False

    def _write(self, source: BinaryIO, path: Path) -> Path:
        try:
            source.seek(0)
            with open(path, "wb") as f:
                shutil.copyfileobj(source, f, COPY_CHUNK_SIZE)
        except OSError as e:
            # Don't leave a truncated file behind
            self.delete_file(path)
            raise StorageError(f"Failed to save file {path.name}: {e}") from e
        return path


def get_storage_service(settings: Settings = Depends(get_settings)) -> StorageService:
    """
    Get storage service instance

    Usage in FastAPI:
        @router.post("/upload")
        def upload(storage: StorageService = Depends(get_storage_service)):
            ...
    """
    return StorageService(settings.assets_root, settings.temp_root)
