# =============================================================================
# app/routers/images.py - Image Management Endpoints
# =============================================================================
# Upload, replace, delete and list the authenticated user's images.
# Files are sent as multipart/form-data in the "image" field.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Path, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.dependencies import CurrentUser, DbSession
from core.models import ApiResponse, ImageResponse
from core.services import ImageService, IncomingFile

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_IMAGE_ID = 2**31 - 1

ImageFile = Annotated[
    UploadFile | None,
    File(description="Image file (JPEG, PNG or GIF)"),
]

# Upper bound keeps ids inside the 32-bit Integer primary key column
ImageId = Annotated[int, Path(description="Image ID", ge=1, le=MAX_IMAGE_ID)]


# =============================================================================
# Helper Functions
# =============================================================================

async def _read_upload(image: UploadFile | None) -> IncomingFile | None:
    """
    Read the multipart part into memory.

    At most one byte past the size limit is read; that is enough for the
    service to reject oversized files without buffering all of them.
    """
    if image is None or not image.filename:
        return None

    content = await image.read(settings.max_upload_size_bytes + 1)
    await image.close()
    logger.debug(f"Received upload: {image.filename} ({len(content)} bytes read)")

    return IncomingFile(
        filename=image.filename,
        content_type=image.content_type,
        content=content,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "",
    response_model=ApiResponse[ImageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    user: CurrentUser,
    db: DbSession,
    image: ImageFile = None,
):
    """
    Upload a new image.

    This endpoint:
    1. Validates the file (type, size)
    2. Stores it in the upload directory
    3. Records its metadata for the current user

    Returns the image metadata with its public URL.
    """
    upload = await _read_upload(image)
    result = await run_in_threadpool(ImageService.upload_image, db, user.id, upload)
    return ApiResponse(message="Image uploaded successfully", data=result)


@router.get("", response_model=ApiResponse[list[ImageResponse]])
def get_user_images(
    user: CurrentUser,
    db: DbSession,
):
    """
    List all images owned by the authenticated user.
    """
    result = ImageService.get_user_images(db, user.id)
    return ApiResponse(message="Images retrieved successfully", data=result)


@router.put("/{image_id}", response_model=ApiResponse[ImageResponse])
async def update_image(
    image_id: ImageId,
    user: CurrentUser,
    db: DbSession,
    image: ImageFile = None,
):
    """
    Replace the file of an existing image.

    The previous file is deleted once the new one is recorded.
    User must own the image.
    """
    upload = await _read_upload(image)
    result = await run_in_threadpool(ImageService.update_image, db, user.id, image_id, upload)
    return ApiResponse(message="Image updated successfully", data=result)


@router.delete("/{image_id}", response_model=ApiResponse[None])
def delete_image(
    image_id: ImageId,
    user: CurrentUser,
    db: DbSession,
):
    """
    Delete an image and its stored file.

    User must own the image.
    """
    ImageService.delete_image(db, user.id, image_id)
    return ApiResponse(message="Image deleted successfully")
