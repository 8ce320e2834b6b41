# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Tokens are issued by POST /api/v1/users/login and must be sent as:
#   Authorization: Bearer <token>
# =============================================================================

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.exceptions import AuthenticationError
from lib.security import decode_access_token

logger = logging.getLogger(__name__)

# Declares the bearer scheme in OpenAPI; header checks happen below so the
# error messages can say what is wrong with the header.
security = HTTPBearer(auto_error=False, description="JWT from POST /api/v1/users/login")


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthUser:
    """
    Extract and validate the user from the bearer token.

    This dependency:
    1. Reads the Authorization header
    2. Checks it has the form "Bearer <token>"
    3. Verifies the JWT signature and expiry
    4. Returns an AuthUser with the user's id and email

    Raises:
        AuthenticationError: 401 if the header is missing or malformed,
            or the token is invalid or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise AuthenticationError("Authorization header missing")

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError(
            "Invalid authorization header format. Expected: Bearer <token>"
        )

    claims = decode_access_token(parts[1])

    logger.debug(f"Authenticated user: {claims.user_id}")
    return AuthUser(id=claims.user_id, email=claims.email)
