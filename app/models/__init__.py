"""
SQLAlchemy Models Package

This package contains all database models for the Library API.

Model Relationships:
- Author <-> Book: Many-to-Many through the BookAuthor association model,
                   which also stores the position of each author on the book

Import all models here to:
1. Make them available as: from app.models import Book, Author
2. Register every table on Base.metadata before create_all() runs
"""

# The order matters for SQLAlchemy to resolve relationships
from app.models.author import Author
from app.models.book import Book, BookAuthor

__all__ = [
    "Author",
    "Book",
    "BookAuthor",
]
