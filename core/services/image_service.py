# =============================================================================
# core/services/image_service.py - Image Business Logic
# =============================================================================
# Upload, replace, delete and list a user's images.
# Rows live in the images table; bytes live in the upload directory.
# =============================================================================

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    ImageAccessDeniedError,
    ImageNotFoundError,
    InvalidFileTypeError,
    NoFileProvidedError,
)
from core.entities import Image
from core.models.image import ImageCreate, ImageResponse, ImageUpdate
from core.repositories import ImageRepository
from core.services.storage_service import StorageService, StoredFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomingFile:
    """
    An uploaded file as received from the client.

    Routers build this from the multipart part so the service
    doesn't depend on the web framework.
    """
    filename: str
    content_type: str | None
    content: bytes


class ImageService:
    """
    Service for image management operations.

    Every mutating operation checks that the image belongs to the caller.
    """

    @staticmethod
    def validate_file(upload: IncomingFile | None) -> IncomingFile:
        """
        Check that a file was sent, is an allowed image type and fits the size limit.

        Raises:
            NoFileProvidedError: If there is no file
            InvalidFileTypeError: If the MIME type isn't allowed
            FileTooLargeError: If the file exceeds MAX_UPLOAD_SIZE_MB
        """
        if upload is None:
            raise NoFileProvidedError()

        allowed = settings.allowed_mime_types_list
        if (upload.content_type or "").lower() not in allowed:
            raise InvalidFileTypeError(upload.content_type, allowed)

        size = len(upload.content)
        if size > settings.max_upload_size_bytes:
            raise FileTooLargeError(size / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

        return upload

    @staticmethod
    def upload_image(
        db: Session,
        user_id: int,
        upload: IncomingFile | None,
    ) -> ImageResponse:
        """
        Store a new image for `user_id`.

        Returns:
            ImageResponse with metadata and public URL
        """
        upload = ImageService.validate_file(upload)
        stored = StorageService.save_file(upload.content, upload.filename)

        try:
            image = ImageRepository.create(db, ImageService._image_create(user_id, upload, stored))
        except Exception:
            db.rollback()
            StorageService.delete_file(stored.path)
            raise

        logger.info(f"User {user_id} uploaded image {image.id} ({stored.filename})")
        return ImageService.to_response(image)

    @staticmethod
    def update_image(
        db: Session,
        user_id: int,
        image_id: int,
        upload: IncomingFile | None,
    ) -> ImageResponse:
        """
        Replace the file behind an existing image.

        The old file is removed only after the row points to the new one.

        Raises:
            ImageNotFoundError: If the image doesn't exist
            ImageAccessDeniedError: If the image belongs to another user
        """
        upload = ImageService.validate_file(upload)
        image = ImageService._get_owned_image(db, user_id, image_id, action="update")
        old_path = image.path

        stored = StorageService.save_file(upload.content, upload.filename)

        try:
            image = ImageRepository.update(db, image, ImageService._image_update(upload, stored))
        except Exception:
            db.rollback()
            StorageService.delete_file(stored.path)
            raise

        StorageService.delete_file(old_path)

        logger.info(f"User {user_id} replaced image {image.id} with {stored.filename}")
        return ImageService.to_response(image)

    @staticmethod
    def delete_image(db: Session, user_id: int, image_id: int) -> None:
        """
        Delete an image's file and its row.

        Raises:
            ImageNotFoundError: If the image doesn't exist
            ImageAccessDeniedError: If the image belongs to another user
        """
        image = ImageService._get_owned_image(db, user_id, image_id, action="delete")

        StorageService.delete_file(image.path)
        ImageRepository.delete(db, image)

        logger.info(f"User {user_id} deleted image {image_id}")

    @staticmethod
    def get_user_images(db: Session, user_id: int) -> list[ImageResponse]:
        images = ImageRepository.find_by_user_id(db, user_id)
        return [ImageService.to_response(image) for image in images]

    @staticmethod
    def to_response(image: Image) -> ImageResponse:
        return ImageResponse(
            id=image.id,
            filename=image.filename,
            original_name=image.original_name,
            mimetype=image.mimetype,
            size=image.size,
            url=StorageService.build_url(image.filename),
            created_at=image.created_at,
            updated_at=image.updated_at,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _get_owned_image(db: Session, user_id: int, image_id: int, action: str) -> Image:
        image = ImageRepository.find_by_id(db, image_id)
        if not image:
            raise ImageNotFoundError(image_id)
        if image.user_id != user_id:
            logger.warning(f"User {user_id} tried to {action} image {image_id} owned by {image.user_id}")
            raise ImageAccessDeniedError(image_id, action)
        return image

    @staticmethod
    def _image_update(upload: IncomingFile, stored: StoredFile) -> ImageUpdate:
        return ImageUpdate(
            filename=stored.filename,
            original_name=upload.filename,
            mimetype=upload.content_type.lower(),
            size=stored.size,
            path=stored.path,
        )

    @staticmethod
    def _image_create(user_id: int, upload: IncomingFile, stored: StoredFile) -> ImageCreate:
        return ImageCreate(user_id=user_id, **ImageService._image_update(upload, stored).model_dump())
