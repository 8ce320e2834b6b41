# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: Success envelope and camelCase base model
# - user.py: Registration, login and user profile schemas
# - image.py: Image metadata schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Common Models - Response envelope
# -----------------------------------------------------------------------------
from .common import ApiResponse, CamelModel

# -----------------------------------------------------------------------------
# User Models - Accounts and authentication
# -----------------------------------------------------------------------------
from .user import (
    LoginResult,
    RegisterResult,
    TokenStatus,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)

# -----------------------------------------------------------------------------
# Image Models - Uploaded image metadata
# -----------------------------------------------------------------------------
from .image import ImageCreate, ImageResponse, ImageUpdate

__all__ = [
    # Common
    "ApiResponse",
    "CamelModel",
    # User
    "LoginResult",
    "RegisterResult",
    "TokenStatus",
    "UserLoginRequest",
    "UserRegisterRequest",
    "UserResponse",
    # Image
    "ImageCreate",
    "ImageResponse",
    "ImageUpdate",
]
