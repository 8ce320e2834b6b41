# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - database.py: SQLAlchemy engine, session factory and declarative Base
# - security.py: bcrypt password hashing and JWT access tokens
#
# Modules are imported directly (from lib.database import get_db) so that
# loading one doesn't pull in the other.
# =============================================================================
