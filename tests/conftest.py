"""
pytest Fixtures for Library API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions and clients (isolation between tests)

Every test runs inside a transaction that is rolled back afterwards, so
tests never see each other's data.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# The app's own engine points at a throwaway SQLite database; the tests
# swap in their own session through the get_db dependency override.
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["DEBUG"] = "false"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Author, Book

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated and needs no external database.
# StaticPool keeps the single connection alive for the whole session;
# without it the in-memory database would vanish between connections.


@pytest.fixture(scope="session")
def engine():
    """Create a SQLite in-memory database engine with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection whose outer transaction is
    rolled back after the test, so commits made by the code under test
    never outlive it.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


def _client_for(db_session: Session, **client_options) -> Generator[TestClient, None, None]:
    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, **client_options) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """
    yield from _client_for(db_session)


@pytest.fixture(scope="function")
def lenient_client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Test client that returns 500 responses instead of re-raising.

    Starlette re-raises unhandled exceptions after the catch-all handler
    has answered; this client lets tests inspect that answer.
    """
    yield from _client_for(db_session, raise_server_exceptions=False)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(
        name="Daniel Handler",
        pseudonym="Lemony Snicket",
        nationality="American",
        birth_date=date(1970, 2, 28),
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def second_author(db_session: Session) -> Author:
    """Create a second author for multi-author and conflict scenarios."""
    author = Author(
        name="Brett Helquist",
        pseudonym=None,
        nationality="American",
        birth_date=date(1966, 1, 1),
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book written by the sample author."""
    book = Book(
        title="A Series of Unfortunate Events",
        subtitle="The Bad Beginning",
        total_pages=176,
        publisher="HarperCollins",
        published_date=date(1999, 8, 25),
        isbn13="9780064407663",
    )
    book.set_authors([sample_author])
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def series_books(db_session: Session, sample_author: Author) -> list[Book]:
    """
    The first four books of the series, stored out of subtitle order.

    Two of them share a page count, which exercises tie-breaking.
    """
    books_data = [
        ("The Bad Beginning", 176, date(1999, 8, 25), "9780064407663"),
        ("The Reptile Room", 208, date(1999, 8, 25), "9780064407670"),
        ("The Wide Window", 224, date(2000, 2, 2), "9780064407687"),
        ("The Miserable Mill", 208, date(2000, 4, 5), "9780064407694"),
    ]

    books = []
    for subtitle, pages, published, isbn in books_data:
        book = Book(
            title="A Series of Unfortunate Events",
            subtitle=subtitle,
            total_pages=pages,
            publisher="HarperCollins",
            published_date=published,
            isbn13=isbn,
        )
        book.set_authors([sample_author])
        db_session.add(book)
        books.append(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books


@pytest.fixture
def many_books(db_session: Session, sample_author: Author) -> list[Book]:
    """Create twelve books for pagination testing."""
    books = []
    for i in range(12):
        book = Book(
            title=f"Test Book {i + 1}",
            total_pages=100 + i,
            isbn13=f"9780000000{i:03d}",
        )
        book.set_authors([sample_author])
        db_session.add(book)
        books.append(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books


@pytest.fixture
def book_payload(sample_author: Author) -> dict:
    """A valid save/update request body referencing the sample author."""
    return {
        "title": "A Series of Fortunate Events",
        "subtitle": "The Ostentatious Academy",
        "authors": [{"id": sample_author.id, "pseudonym": "Lemony Snicket"}],
        "totalPages": 231,
        "publisher": "HarperCollins",
        "publishedDate": "2009-10-13",
        "isbn13": "9780064408639",
    }
