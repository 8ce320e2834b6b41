# =============================================================================
# core/services/storage_service.py - Local File Storage
# =============================================================================
# Handles writing and removing uploaded images under settings.UPLOAD_DIR.
# Files are served back to clients from /uploads/<filename>.
# =============================================================================

import logging
import os
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from app.config import settings
from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

# URL prefix the upload directory is mounted under
PUBLIC_PREFIX = "/uploads"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredFile:
    """Result of writing an upload to disk."""
    filename: str
    path: str
    size: int


class StorageService:
    """
    Service for filesystem storage operations.

    Handles saving and deleting image files in the upload directory.
    """

    @staticmethod
    def upload_dir() -> Path:
        return Path(settings.UPLOAD_DIR)

    @staticmethod
    def ensure_upload_dir() -> Path:
        """Create the upload directory if it doesn't exist."""
        directory = StorageService.upload_dir()
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    @staticmethod
    def generate_filename(original_name: str) -> str:
        """
        Build a unique stored filename from the client's filename.

        Format: <stem>-<epoch millis>-<random number><ext>
        Example: "vacation.jpg" -> "vacation-1700000000000-482913377.jpg"

        Directory components in `original_name` are discarded.
        """
        base = os.path.basename(original_name.replace("\\", "/"))
        stem, ext = os.path.splitext(base)
        stem = _UNSAFE_CHARS.sub("_", stem).strip("._") or "image"
        ext = _UNSAFE_CHARS.sub("", ext).lower()
        unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return f"{stem}-{unique_suffix}{ext}"

    @staticmethod
    def save_file(content: bytes, original_name: str) -> StoredFile:
        """
        Write `content` to a new file in the upload directory.

        Args:
            content: Raw file bytes
            original_name: Filename sent by the client

        Returns:
            StoredFile with the generated filename and its path

        Raises:
            StorageUploadError: If the file can't be written
        """
        filename = StorageService.generate_filename(original_name)

        try:
            directory = StorageService.ensure_upload_dir()
            path = directory / filename
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Storage write failed for {filename}: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Stored file: {path} ({len(content)} bytes)")
        return StoredFile(filename=filename, path=str(path), size=len(content))

    @staticmethod
    def delete_file(path: str) -> bool:
        """
        Delete a stored file.

        A file that is already gone is not an error for callers;
        failures are logged and reported through the return value.

        Returns:
            True if the file was deleted
        """
        try:
            Path(path).unlink()
            logger.info(f"Deleted file from storage: {path}")
            return True
        except FileNotFoundError:
            logger.warning(f"File already missing from storage: {path}")
            return False
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}")
            return False

    @staticmethod
    def build_url(filename: str) -> str:
        """Public URL for a stored filename."""
        return f"{PUBLIC_PREFIX}/{filename}"

    @staticmethod
    def is_writable() -> bool:
        """Check that the upload directory exists (creating it) and is writable."""
        directory = StorageService.ensure_upload_dir()
        return os.access(directory, os.W_OK)
