# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for account operations:
# - UserRegisterRequest / UserLoginRequest: request bodies
# - UserResponse: public user data (never includes the password)
# - RegisterResult / LoginResult: payloads inside the response envelope
# =============================================================================

import re

from pydantic import Field, field_validator

from lib.security import BCRYPT_MAX_BYTES

from .common import CamelModel, UtcDateTime

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Must be a valid email address")
    return value


class UserRegisterRequest(CamelModel):
    """
    Body of POST /users/register.

    Example:
        {
            "email": "user@example.com",
            "password": "Password123",
            "fullName": "Jane Doe"
        }
    """

    email: str = Field(..., max_length=255, examples=["user@example.com"])
    password: str = Field(..., max_length=128, examples=["Password123"])
    full_name: str = Field(..., max_length=255, examples=["Jane Doe"])

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        """At least 6 characters with one uppercase, one lowercase and one digit."""
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long")
        if not (
            any(c.islower() for c in value)
            and any(c.isupper() for c in value)
            and any(c.isdigit() for c in value)
        ):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return value

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Full name is required")
        return value


class UserLoginRequest(CamelModel):
    """Body of POST /users/login."""

    email: str = Field(..., max_length=255, examples=["user@example.com"])
    password: str = Field(..., max_length=128, examples=["Password123"])

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UserResponse(CamelModel):
    """Public view of a user."""

    id: int = Field(..., examples=[1])
    email: str = Field(..., examples=["user@example.com"])
    full_name: str = Field(..., examples=["Jane Doe"])
    created_at: UtcDateTime = Field(..., description="Account creation timestamp")


class RegisterResult(CamelModel):
    """Payload returned after a successful registration."""

    user_id: int = Field(..., examples=[1])


class LoginResult(CamelModel):
    """Payload returned after a successful login."""

    token: str = Field(..., description="JWT access token")
    user: UserResponse


class TokenStatus(CamelModel):
    """Payload returned by GET /auth/verify."""

    valid: bool = True
    user_id: int
    email: str | None = None
