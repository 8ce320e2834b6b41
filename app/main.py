# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Image Management API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings
from app.exceptions import (
    ImageApiException,
    http_exception_handler,
    image_api_exception_handler,
    integrity_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users, images
from app.auth import routes as auth_routes
from core.services import StorageService
from core.services.storage_service import PUBLIC_PREFIX
from lib.database import dispose_engine, init_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the upload directory and database tables
    - Shutdown: close pooled database connections
    """
    logger.info(f"Starting Image Management API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    upload_dir = StorageService.ensure_upload_dir()
    logger.info(f"Serving uploads from {upload_dir.resolve()}")

    init_db()

    yield

    logger.info("Shutting down Image Management API")
    dispose_engine()


# Create FastAPI application
app = FastAPI(
    title="Image Management API",
    description="""
## User Authentication and Image Management

Register an account, log in to receive a JWT, then upload and manage your images.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:8000/api/v1/users/register \\
  -H "Content-Type: application/json" \\
  -d '{"email": "user@example.com", "password": "Password123", "fullName": "Jane Doe"}'

# 2. Log in
curl -X POST http://localhost:8000/api/v1/users/login \\
  -H "Content-Type: application/json" \\
  -d '{"email": "user@example.com", "password": "Password123"}'

# 3. Upload an image
curl -X POST http://localhost:8000/api/v1/images \\
  -H "Authorization: Bearer <token>" \\
  -F "image=@photo.jpg"
```

Uploaded files are served from `/uploads/<filename>`.
""",
    version=API_VERSION,
    docs_url="/api-docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Users",
            "description": "Register and log in",
        },
        {
            "name": "Auth",
            "description": "Inspect the current token and user",
        },
        {
            "name": "Images",
            "description": "Upload, replace, delete and list your images",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

def cors_allowed_origins(config: Settings) -> list[str]:
    """Any origin outside production; only CORS_ORIGINS in production."""
    if config.is_production:
        return config.cors_origins_list
    return ["*"]


# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(settings),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ImageApiException, image_api_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unhandled_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

# Registration and login
app.include_router(
    users.router,
    prefix="/api/v1/users",
    tags=["Users"]
)

# Current user / token endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Image management endpoints
app.include_router(
    images.router,
    prefix="/api/v1/images",
    tags=["Images"]
)

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)

# Static file serving for uploads
app.mount(
    PUBLIC_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Image Management API",
        "version": API_VERSION,
        "docs": "/api-docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
