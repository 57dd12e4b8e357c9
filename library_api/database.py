"""
Database Configuration Module

Sets up SQLAlchemy 2.0 for the Library API.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection (see get_db).
"""

import logging
import sqlite3
from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_api.config import Settings, get_settings
from library_api.exceptions import BadRequestError

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
def build_engine(config: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    Pool sizing only applies to server databases; SQLite uses the pool
    SQLAlchemy picks for it and needs check_same_thread disabled because
    FastAPI runs sync endpoints in a thread pool.
    """
    if config.is_sqlite:
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},
            echo=config.debug,
        )

    return create_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=config.debug,
    )


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = build_engine(settings)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session for the request, yields it to the route handler and
    closes it when the request ends, even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Handy for local development and tests. Deployed databases should be
    managed with Alembic migrations instead.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data!
    """
    Base.metadata.drop_all(bind=engine)


def commit_or_reject(db: Session, message: str) -> None:
    """
    Commit the session, turning a unique-constraint violation into a 400.

    Routers check uniqueness before writing; this covers two requests
    racing past that check with the same ISBN or author name.

    Raises:
        BadRequestError: with message, after rolling the session back
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Integrity error on commit: {exc.orig}")
        raise BadRequestError(message) from exc
