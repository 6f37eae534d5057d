# src/core/services/storage_service.py
import os
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from src.core.config import settings
from src.core.logger import get_logger

logger = get_logger(__name__)


class StorageError(Exception):
    """Raised when a stored file cannot be written or removed."""

    pass


class ThumbnailValidationError(StorageError):
    """Base class for uploads that are rejected before being written."""

    pass


class ThumbnailTooLargeError(ThumbnailValidationError):
    pass


class ThumbnailTypeError(ThumbnailValidationError):
    pass


class ThumbnailStorage:
    """Keeps thumbnail images as plain files inside the upload folder."""

    def __init__(
        self,
        upload_dir: str,
        max_size: int = 2_000_000,
        allowed_extensions: Optional[Iterable[str]] = None,
    ):
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions or []}
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def build_filename(original: str) -> str:
        """Return ``<stem><uuid>.<ext>`` for a client supplied filename.

        The stem is everything before the first dot of the base name; the
        extension is whatever follows the last one.
        """
        name = os.path.basename(original.replace("\\", "/"))
        parts = name.split(".")
        stem = parts[0]
        extension = parts[-1] if len(parts) > 1 else ""
        filename = f"{stem}{uuid.uuid4().hex}"
        return f"{filename}.{extension}" if extension else filename

    @staticmethod
    def is_present(upload: Optional[UploadFile]) -> bool:
        """Browsers send an empty part when no file was chosen."""
        return upload is not None and bool(upload.filename)

    def path_for(self, filename: str) -> Path:
        return self.upload_dir / os.path.basename(filename)

    def validate(self, filename: str, size: int) -> None:
        if size > self.max_size:
            raise ThumbnailTooLargeError(
                f"Thumbnail too big. File size should be less than {self.max_size // 1_000_000}mb"
            )

        extension = Path(filename).suffix.lower()
        if self.allowed_extensions and extension not in self.allowed_extensions:
            raise ThumbnailTypeError(
                f"Thumbnail must be an image ({', '.join(sorted(self.allowed_extensions))})"
            )

    async def save(self, upload: UploadFile) -> str:
        """Validate and write an upload; return the stored filename."""
        if upload.size is not None:
            self.validate(upload.filename or "", upload.size)

        content = await upload.read()
        self.validate(upload.filename or "", len(content))

        filename = self.build_filename(upload.filename or "thumbnail")
        try:
            await run_in_threadpool(self.path_for(filename).write_bytes, content)
        except OSError as e:
            raise StorageError(f"Failed to upload thumbnail: {e}") from e

        logger.debug("Stored thumbnail %s (%d bytes)", filename, len(content))
        return filename

    async def delete(self, filename: str) -> None:
        """Remove a stored file; a missing file is an error."""
        try:
            await run_in_threadpool(self.path_for(filename).unlink)
        except OSError as e:
            raise StorageError(f"Failed to delete thumbnail {filename}: {e}") from e

        logger.debug("Removed thumbnail %s", filename)

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def list_files(self) -> List[str]:
        return sorted(p.name for p in self.upload_dir.iterdir() if p.is_file())


def get_thumbnail_storage() -> ThumbnailStorage:
    """Storage configured from settings."""
    return ThumbnailStorage(
        upload_dir=settings.UPLOAD_FOLDER,
        max_size=settings.MAX_THUMBNAIL_SIZE,
        allowed_extensions=settings.get_thumbnail_extensions(),
    )
