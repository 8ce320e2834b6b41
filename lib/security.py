# =============================================================================
# lib/security.py - Password Hashing and Access Tokens
# =============================================================================
# - Passwords are hashed with bcrypt through passlib's CryptContext.
# - Access tokens are HS256 JWTs signed with settings.JWT_SECRET.
#
# Usage:
#   from lib.security import hash_password, create_access_token
#   hashed = hash_password("Password123")
#   token = create_access_token(user_id=1, email="user@example.com")
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from app.config import settings
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only hashes the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class TokenPayload(BaseModel):
    """
    Decoded access token claims.

    `sub` carries the user id as a string (RFC 7519 requires a string).
    """
    sub: str
    email: str | None = None
    iat: int
    exp: int

    @property
    def user_id(self) -> int:
        return int(self.sub)


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Constant-time check of `plain_password` against a stored hash.

    Passwords longer than bcrypt accepts never match; otherwise bcrypt
    would compare only their first 72 bytes.
    """
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognizable hash
        logger.warning("Stored password hash could not be parsed")
        return False


# =============================================================================
# Tokens
# =============================================================================

def create_access_token(
    user_id: int,
    email: str | None = None,
    expires_in: int | None = None,
) -> str:
    """
    Issue a signed access token for `user_id`.

    Args:
        user_id: Database id of the authenticated user
        email: Optional email claim
        expires_in: Lifetime in seconds (defaults to settings.JWT_EXPIRES_IN)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    lifetime = settings.JWT_EXPIRES_IN if expires_in is None else expires_in
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify the signature and expiry of `token` and return its claims.

    Raises:
        AuthenticationError: "Token expired" or "Invalid token"
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise AuthenticationError("Token expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthenticationError("Invalid token")

    if not str(payload.get("sub", "")).isdigit():
        logger.warning("JWT token missing numeric 'sub' claim")
        raise AuthenticationError("Invalid token")

    try:
        return TokenPayload(**payload)
    except ValueError as e:
        logger.warning(f"JWT token has malformed claims: {e}")
        raise AuthenticationError("Invalid token")
