"""Database connection and session management.

This module provides SQLModel engine setup, connection pooling, session management,
and database initialization utilities for the user API.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool
from sqlmodel import Session, SQLModel, create_engine

from .config import settings
from .logging_config import get_logger

# Import models to register them with SQLModel
from .models import Account, User  # noqa: F401

logger = get_logger("database")


# Create database engine with connection pooling
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # Log SQL queries in debug mode
    pool_size=10,
    max_overflow=20,
    pool_timeout=30,
    pool_recycle=3600,
    poolclass=QueuePool,
    connect_args={
        "check_same_thread": False  # Required for SQLite
    } if settings.is_sqlite else {}
)


def get_session() -> Generator[Session, None, None]:
    """Dependency to get database session.

    The session is rolled back if the request fails and closed after use.

    Yields:
        Session: SQLModel database session
    """
    with Session(engine) as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def create_db_and_tables() -> None:
    """Create database tables based on SQLModel definitions.

    Idempotent: existing tables are left untouched.
    """
    SQLModel.metadata.create_all(engine)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI lifespan context manager for database initialization.

    Creates tables on startup and disposes of the connection pool on shutdown.
    """
    logger.info("Creating database tables")
    create_db_and_tables()
    yield
    logger.info("Disposing database engine")
    engine.dispose()


def get_database_info() -> dict[str, Any]:
    """Get database connection information for health checks.

    Returns:
        dict: Database URL (credentials hidden) and pool status
    """
    return {
        "url": settings.database_url.split("@")[-1] if "@" in settings.database_url else settings.database_url,
        "pool_size": engine.pool.size(),
        "checked_in": engine.pool.checkedin(),
        "checked_out": engine.pool.checkedout(),
        "overflow": engine.pool.overflow(),
    }


def check_database_connection() -> bool:
    """Check that the database accepts connections.

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
