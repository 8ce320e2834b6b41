# =============================================================================
# app/routers/users.py - Registration and Login Endpoints
# =============================================================================
# Public endpoints: no token required.
# =============================================================================

from fastapi import APIRouter, status

from app.dependencies import DbSession
from core.models import (
    ApiResponse,
    LoginResult,
    RegisterResult,
    UserLoginRequest,
    UserRegisterRequest,
)
from core.services import UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[RegisterResult],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation failed or email already exists"}},
)
def register(
    request: UserRegisterRequest,
    db: DbSession,
):
    """
    Register a new user.

    The password must be at least 6 characters and contain an uppercase
    letter, a lowercase letter and a number. Emails are stored lower-case.
    """
    result = UserService.register(
        db,
        email=request.email,
        password=request.password,
        full_name=request.full_name,
    )
    return ApiResponse(message="User registered successfully", data=result)


@router.post(
    "/login",
    response_model=ApiResponse[LoginResult],
    responses={401: {"description": "Invalid credentials"}},
)
def login(
    request: UserLoginRequest,
    db: DbSession,
):
    """
    Log in with email and password.

    Returns a JWT to send as `Authorization: Bearer <token>` on image endpoints.
    """
    result = UserService.login(db, email=request.email, password=request.password)
    return ApiResponse(message="Login successful", data=result)
