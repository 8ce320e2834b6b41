# =============================================================================
# core/entities/ - ORM Table Definitions
# =============================================================================
# SQLAlchemy entities mapped onto the relational schema:
# - user.py: users table (credentials and profile)
# - image.py: images table (metadata of files stored on disk)
#
# Importing this package registers every table on lib.database.Base.
# =============================================================================

from .user import User
from .image import Image

__all__ = [
    "User",
    "Image",
]
