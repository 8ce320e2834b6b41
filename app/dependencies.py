# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers as type annotations.
# =============================================================================

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.auth import AuthUser, get_current_user
from lib.database import get_db

# Type aliases for dependency injection
DbSession = Annotated[Session, Depends(get_db)]
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
