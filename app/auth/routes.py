# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for the currently authenticated user.
# Registration and login live in app/routers/users.py.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CurrentUser, DbSession
from core.models import ApiResponse, TokenStatus, UserResponse
from core.services import UserService

router = APIRouter()


@router.get("/me", response_model=ApiResponse[UserResponse])
def get_current_user_info(
    user: CurrentUser,
    db: DbSession,
):
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the account was removed after the token was issued
    """
    profile = UserService.get_user(db, user.id)
    return ApiResponse(message="User retrieved successfully", data=profile)


@router.get("/verify", response_model=ApiResponse[TokenStatus])
async def verify_token(
    user: CurrentUser,
):
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return ApiResponse(
        message="Token is valid",
        data=TokenStatus(valid=True, user_id=user.id, email=user.email),
    )
