#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books for development.

USAGE:
    # From the project root with the virtualenv activated
    python scripts/seed_data.py

    # Start from an empty database
    python scripts/seed_data.py --clear

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates sample authors and books
4. Links every book to its authors, in cover order
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Author, Book, BookAuthor


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookAuthor))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors, keyed by the name used in books_data."""
    print("Creating authors...")
    authors_data = [
        {
            "name": "Daniel Handler",
            "pseudonym": "Lemony Snicket",
            "nationality": "American",
            "birth_date": date(1970, 2, 28),
        },
        {
            "name": "Eric Arthur Blair",
            "pseudonym": "George Orwell",
            "nationality": "British",
            "birth_date": date(1903, 6, 25),
        },
        {
            "name": "Jane Austen",
            "pseudonym": None,
            "nationality": "British",
            "birth_date": date(1775, 12, 16),
        },
        {
            "name": "John Ronald Reuel Tolkien",
            "pseudonym": "J.R.R. Tolkien",
            "nationality": "British",
            "birth_date": date(1892, 1, 3),
        },
        {
            "name": "Terry Pratchett",
            "pseudonym": None,
            "nationality": "British",
            "birth_date": date(1948, 4, 28),
        },
        {
            "name": "Neil Gaiman",
            "pseudonym": None,
            "nationality": "British",
            "birth_date": date(1960, 11, 10),
        },
    ]

    authors = {}
    for data in authors_data:
        author = Author(**data)
        db.add(author)
        authors[data["name"]] = author

    db.commit()
    for author in authors.values():
        db.refresh(author)

    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books linked to their authors."""
    print("Creating books...")

    books_data = [
        {
            "title": "A Series of Unfortunate Events",
            "subtitle": "The Bad Beginning",
            "total_pages": 176,
            "publisher": "HarperCollins",
            "published_date": date(1999, 8, 25),
            "isbn13": "9780064407663",
            "authors": ["Daniel Handler"],
        },
        {
            "title": "A Series of Unfortunate Events",
            "subtitle": "The Reptile Room",
            "total_pages": 208,
            "publisher": "HarperCollins",
            "published_date": date(1999, 8, 25),
            "isbn13": "9780064407670",
            "authors": ["Daniel Handler"],
        },
        {
            "title": "A Series of Unfortunate Events",
            "subtitle": "The Wide Window",
            "total_pages": 224,
            "publisher": "HarperCollins",
            "published_date": date(2000, 2, 2),
            "isbn13": "9780064407687",
            "authors": ["Daniel Handler"],
        },
        {
            "title": "A Series of Unfortunate Events",
            "subtitle": "The Miserable Mill",
            "total_pages": 208,
            "publisher": "HarperCollins",
            "published_date": date(2000, 4, 5),
            "isbn13": "9780064407694",
            "authors": ["Daniel Handler"],
        },
        {
            "title": "Nineteen Eighty-Four",
            "subtitle": None,
            "total_pages": 328,
            "publisher": "Signet Classics",
            "published_date": date(1949, 6, 8),
            "isbn13": "9780451524935",
            "authors": ["Eric Arthur Blair"],
        },
        {
            "title": "Pride and Prejudice",
            "subtitle": None,
            "total_pages": 432,
            "publisher": "Penguin Classics",
            "published_date": date(1813, 1, 28),
            "isbn13": "9780141439518",
            "authors": ["Jane Austen"],
        },
        {
            "title": "The Hobbit",
            "subtitle": "There and Back Again",
            "total_pages": 310,
            "publisher": "Mariner Books",
            "published_date": date(1937, 9, 21),
            "isbn13": "9780547928227",
            "authors": ["John Ronald Reuel Tolkien"],
        },
        {
            "title": "Good Omens",
            "subtitle": "The Nice and Accurate Prophecies of Agnes Nutter, Witch",
            "total_pages": 432,
            "publisher": "William Morrow",
            "published_date": date(1990, 5, 10),
            "isbn13": "9780060853983",
            "authors": ["Terry Pratchett", "Neil Gaiman"],
        },
    ]

    books = []
    for data in books_data:
        author_names = data.pop("authors")

        book = Book(**data)
        book.set_authors([authors[name] for name in author_names])

        db.add(book)
        books.append(book)

    db.commit()
    for book in books:
        db.refresh(book)

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = False) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    # Create tables if they don't exist
    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print("\nYou can now access the API at http://localhost:8080")
        print("API documentation at http://localhost:8080/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the library database")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all authors and books before seeding",
    )
    args = parser.parse_args()
    seed_database(clear_existing=args.clear)


if __name__ == "__main__":
    main()
