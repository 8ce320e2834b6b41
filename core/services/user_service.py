# =============================================================================
# core/services/user_service.py - Account Business Logic
# =============================================================================
# Registration, login and profile lookup.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from core.entities import User
from core.models.user import LoginResult, RegisterResult, UserResponse
from core.repositories import UserRepository
from lib.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for account operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def register(
        db: Session,
        email: str,
        password: str,
        full_name: str,
    ) -> RegisterResult:
        """
        Create a new account.

        Args:
            db: Database session
            email: Normalized (lower-case) email address
            password: Plain-text password; only its hash is stored
            full_name: Display name

        Returns:
            RegisterResult with the new user id

        Raises:
            EmailAlreadyExistsError: If the email is already registered
        """
        if UserRepository.find_by_email(db, email):
            raise EmailAlreadyExistsError(email)

        try:
            user = UserRepository.create(
                db,
                email=email,
                hashed_password=hash_password(password),
                full_name=full_name,
            )
        except IntegrityError:
            # Another request registered the same email in between
            db.rollback()
            raise EmailAlreadyExistsError(email)

        logger.info(f"Registered user: {user.id}")
        return RegisterResult(user_id=user.id)

    @staticmethod
    def login(db: Session, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue an access token.

        Unknown emails and wrong passwords produce the same error so the
        response doesn't reveal which accounts exist.

        Raises:
            InvalidCredentialsError: If the credentials don't match
        """
        user = UserRepository.find_by_email(db, email)
        if not user or not verify_password(password, user.password):
            logger.warning("Rejected login attempt")
            raise InvalidCredentialsError()

        token = create_access_token(user.id, email=user.email)
        logger.info(f"User logged in: {user.id}")

        return LoginResult(token=token, user=UserService.to_response(user))

    @staticmethod
    def get_user(db: Session, user_id: int) -> UserResponse:
        user = UserRepository.find_by_id(db, user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return UserService.to_response(user)

    @staticmethod
    def to_response(user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            created_at=user.created_at,
        )
