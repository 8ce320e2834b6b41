# =============================================================================
# core/repositories/__init__.py - Repository Layer Exports
# =============================================================================
# Repositories are the only code that builds SQL queries.
# Services call them; routers never do.
# =============================================================================

from .user_repository import UserRepository
from .image_repository import ImageRepository

__all__ = [
    "UserRepository",
    "ImageRepository",
]
