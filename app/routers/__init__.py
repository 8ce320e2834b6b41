# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Registration and login endpoints
# - images.py: Image upload, update, delete and list endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import images

__all__ = [
    "health",
    "users",
    "images",
]
