# =============================================================================
# lib/database.py - SQLAlchemy Engine and Session Management
# =============================================================================
# This module owns the single Engine used by the application and the
# session factory built on top of it.
#
# Usage:
#   from lib.database import get_db
#
#   @router.get("/things")
#   async def list_things(db: Session = Depends(get_db)):
#       ...
# =============================================================================

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every ORM entity."""
    pass


def _build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the Engine for `url`.

    SQLite needs two tweaks: connections are shared across the threadpool
    FastAPI runs sync code in, and foreign keys are off unless enabled per
    connection.
    """
    is_sqlite = url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if is_sqlite else {}

    engine = create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,
    )

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = _build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency yielding a database session.

    The session is always closed when the request finishes; uncommitted
    work is rolled back by close().
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Create all tables that don't exist yet.

    Entities must be imported before this runs so they are registered
    on Base.metadata.
    """
    import core.entities  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def check_connection() -> bool:
    """Run a trivial query; used by the readiness check."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return True


def dispose_engine() -> None:
    """Close all pooled connections."""
    engine.dispose()
    logger.info("Database connections closed")
