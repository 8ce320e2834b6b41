# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API in the same envelope:
#   {"success": false, "message": ..., "code": ..., "suggestion"?, "details"?}
# =============================================================================

import logging
import traceback
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings

logger = logging.getLogger(__name__)


class ImageApiException(Exception):
    """
    Base exception for the Image Management API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "IMAGE_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# User / Auth Exceptions
# =============================================================================

class EmailAlreadyExistsError(ImageApiException):
    """Raised when registering with an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            message="Email already exists",
            code="EMAIL_ALREADY_EXISTS",
            status_code=400,
            suggestion="Log in with this email or register with a different one",
            details={"email": email},
        )


class InvalidCredentialsError(ImageApiException):
    """Raised when the email/password pair does not match a user."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check the email and password and try again",
        )


class AuthenticationError(ImageApiException):
    """Raised when the bearer token is missing, malformed, invalid or expired."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_FAILED",
            status_code=401,
            suggestion="Log in via POST /api/v1/users/login and send 'Authorization: Bearer <token>'",
            headers={"WWW-Authenticate": "Bearer"},
        )


class UserNotFoundError(ImageApiException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: int):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


# =============================================================================
# Image Exceptions
# =============================================================================

class ImageNotFoundError(ImageApiException):
    """Raised when an image ID doesn't exist."""

    def __init__(self, image_id: int):
        super().__init__(
            message="Image not found",
            code="IMAGE_NOT_FOUND",
            status_code=404,
            suggestion="List your images with GET /api/v1/images to find a valid id",
            details={"image_id": image_id},
        )


class ImageAccessDeniedError(ImageApiException):
    """Raised when a user tries to modify an image they don't own."""

    def __init__(self, image_id: int, action: str):
        super().__init__(
            message=f"You are not authorized to {action} this image",
            code="IMAGE_ACCESS_DENIED",
            status_code=403,
            details={"image_id": image_id},
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class NoFileProvidedError(ImageApiException):
    """Raised when a multipart request carries no image file."""

    def __init__(self):
        super().__init__(
            message="No file provided",
            code="NO_FILE_PROVIDED",
            status_code=400,
            suggestion="Send the image as multipart/form-data in the 'image' field",
        )


class InvalidFileTypeError(ImageApiException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type. Only {', '.join(allowed)} are allowed.",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class FileTooLargeError(ImageApiException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message="File size exceeds the maximum allowed limit",
            code="FILE_TOO_LARGE",
            status_code=400,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb},
        )


class StorageUploadError(ImageApiException):
    """Raised when writing a file to the upload directory fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to store file: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def image_api_exception_handler(
    request: Request,
    exc: ImageApiException
) -> JSONResponse:
    """Convert ImageApiException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


def _field_name(loc: tuple | list) -> str:
    # loc looks like ("body", "email") or ("path", "image_id")
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) if parts else "unknown"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Returns 400 with one {field, message} entry per failed rule.
    """
    errors = [
        {
            "field": _field_name(err.get("loc", ())),
            "message": str(err.get("msg", "")).removeprefix("Value error, "),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown routes, wrong methods) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": message,
            "code": f"HTTP_{exc.status_code}",
        },
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(
    request: Request,
    exc: IntegrityError
) -> JSONResponse:
    """Unique or foreign-key violations that slipped past the service checks."""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Resource already exists",
            "code": "INTEGRITY_ERROR",
        }
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    content: dict[str, Any] = {
        "success": False,
        "message": "Internal server error",
        "code": "INTERNAL_ERROR",
    }
    if settings.DEBUG:
        content["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
