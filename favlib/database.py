"""
Database Configuration Module

SQLAlchemy 2.0 engine, session factory and declarative base.

Session Management Pattern
==========================
One session per request:
1. Request arrives -> get_db() opens a session
2. Services use it for every read and write of that request
3. Services commit on success and roll back on failure
4. The session is closed when the request ends
"""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from favlib.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# SQLite (local development, tests) uses its own pool classes, which reject
# the pool sizing arguments.
if settings.is_sqlite:
    engine_options = {"connect_args": {"check_same_thread": False}}
else:
    engine_options = {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **engine_options,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic reads Base.metadata to discover the tables.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields:
        SQLAlchemy Session instance, closed when the request ends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def check_connection() -> None:
    """
    Run a trivial query against the database.

    Raises:
        sqlalchemy.exc.OperationalError: If the database is unreachable
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))

