# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService, StoredFile
from .user_service import UserService
from .image_service import ImageService, IncomingFile

__all__ = [
    "StorageService",
    "StoredFile",
    "UserService",
    "ImageService",
    "IncomingFile",
]
