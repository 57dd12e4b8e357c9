"""
pytest Fixtures for Library API Tests

Shared fixtures used across all test files.

For database tests, every test function gets its own in-memory SQLite
database: tables are created before the test and dropped after it, so
tests never see each other's rows.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Set environment variables BEFORE importing the app: settings are read once
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Author, Book, BookAuthor


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="function")
def engine():
    """
    Create a SQLite in-memory database engine with all tables.

    StaticPool keeps a single connection alive for the whole test.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    The get_db dependency is overridden so every request uses the test
    session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="George Orwell")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def second_author(db_session: Session) -> Author:
    """Create a second author for uniqueness scenarios."""
    author = Author(name="Jane Austen")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book linked to sample_author."""
    book = Book(
        title="1984",
        publication_date=date(1949, 6, 8),
        isbn="9780451524935",
    )
    book.book_authors.append(BookAuthor(author=sample_author))
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def second_book(db_session: Session, sample_author: Author) -> Book:
    """Create a second book by sample_author, with an ISBN-10."""
    book = Book(
        title="Animal Farm",
        publication_date=date(1945, 8, 17),
        isbn="0451526341",
    )
    book.book_authors.append(BookAuthor(author=sample_author))
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def book_payload() -> dict:
    """A valid book request body for sample_author."""
    return {
        "title": "Homage to Catalonia",
        "publicationDate": "1938-04-25",
        "isbn": "9780156421171",
        "authorName": "George Orwell",
    }
