# =============================================================================
# core/models/image.py - Image Schemas
# =============================================================================
# - ImageCreate / ImageUpdate: internal values written to the images table
# - ImageResponse: what clients see (includes the public URL, not the disk path)
# =============================================================================

from pydantic import BaseModel, Field

from .common import CamelModel, UtcDateTime


class ImageUpdate(BaseModel):
    """Columns replaced when a new file is uploaded for an existing image."""

    filename: str
    original_name: str
    mimetype: str
    size: int = Field(..., ge=0)
    path: str


class ImageCreate(ImageUpdate):
    """Columns for a new images row."""

    user_id: int


class ImageResponse(CamelModel):
    """
    Image metadata returned to clients.

    Example:
        {
            "id": 1,
            "filename": "vacation-1700000000000-123456789.jpg",
            "originalName": "vacation.jpg",
            "mimetype": "image/jpeg",
            "size": 1024000,
            "url": "/uploads/vacation-1700000000000-123456789.jpg",
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z"
        }
    """

    id: int = Field(..., examples=[1])
    filename: str = Field(..., description="Stored filename")
    original_name: str = Field(..., description="Filename sent by the client")
    mimetype: str = Field(..., examples=["image/jpeg"])
    size: int = Field(..., description="File size in bytes")
    url: str = Field(..., description="URL to access the image")
    created_at: UtcDateTime
    updated_at: UtcDateTime
