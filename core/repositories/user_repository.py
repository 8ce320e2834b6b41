# =============================================================================
# core/repositories/user_repository.py - User Queries
# =============================================================================

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.entities import User


class UserRepository:
    """Data access for the users table."""

    @staticmethod
    def create(db: Session, email: str, hashed_password: str, full_name: str) -> User:
        user = User(email=email, password=hashed_password, full_name=full_name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def find_by_email(db: Session, email: str) -> User | None:
        return db.scalars(select(User).where(User.email == email)).first()

    @staticmethod
    def find_by_id(db: Session, user_id: int) -> User | None:
        return db.get(User, user_id)
