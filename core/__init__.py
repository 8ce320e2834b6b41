# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - entities/: SQLAlchemy tables (users, images)
# - models/: Pydantic schemas for validation and responses
# - repositories/: Queries over the entities
# - services/: Account, image and file storage operations
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
