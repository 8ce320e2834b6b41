# =============================================================================
# core/repositories/image_repository.py - Image Queries
# =============================================================================

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.entities import Image
from core.models.image import ImageCreate, ImageUpdate


class ImageRepository:
    """Data access for the images table."""

    @staticmethod
    def create(db: Session, data: ImageCreate) -> Image:
        image = Image(**data.model_dump())
        db.add(image)
        db.commit()
        db.refresh(image)
        return image

    @staticmethod
    def find_by_id(db: Session, image_id: int) -> Image | None:
        return db.get(Image, image_id)

    @staticmethod
    def find_by_user_id(db: Session, user_id: int) -> list[Image]:
        """All images owned by `user_id`, oldest first."""
        statement = select(Image).where(Image.user_id == user_id).order_by(Image.id)
        return list(db.scalars(statement).all())

    @staticmethod
    def update(db: Session, image: Image, data: ImageUpdate) -> Image:
        for field, value in data.model_dump().items():
            setattr(image, field, value)
        db.commit()
        db.refresh(image)
        return image

    @staticmethod
    def delete(db: Session, image: Image) -> None:
        db.delete(image)
        db.commit()
