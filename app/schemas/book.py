"""
Book Pydantic Schemas

The most involved schemas, handling:
- Nested author references (ordered)
- ISBN-13 validation
- Page count validation
"""

import re
from datetime import date

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class AuthorOfBookRequest(CamelModel):
    """
    Reference to an existing author inside a book request.

    Only the id is used to resolve the author; the pseudonym is accepted
    so clients can send back what they received.
    """

    id: int = Field(..., ge=1, description="Identifier of an existing author")
    pseudonym: str | None = Field(default=None, max_length=255)


class AuthorOfBookResponse(CamelModel):
    """Author as shown on a book."""

    id: int
    pseudonym: str | None = None


class BookBase(CamelModel):
    """
    Base schema with shared book fields.

    Contains validation for:
    - ISBN-13 format (13 digits, hyphens and spaces allowed on input)
    - Page count (must be positive)
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["A Series of Unfortunate Events"],
    )

    subtitle: str | None = Field(
        default=None,
        max_length=500,
        description="Book subtitle",
        examples=["The Bad Beginning"],
    )

    total_pages: int = Field(
        ...,
        gt=0,
        le=50000,
        description="Number of pages",
        examples=[176],
    )

    publisher: str | None = Field(
        default=None,
        max_length=255,
        description="Publishing house",
        examples=["HarperCollins"],
    )

    published_date: date | None = Field(
        default=None,
        description="Date of publication",
        examples=["1999-08-25"],
    )

    isbn13: str = Field(
        ...,
        description="ISBN-13",
        examples=["9780064407663", "978-0-06-440766-3"],
    )

    @field_validator("isbn13")
    @classmethod
    def validate_isbn13(cls, v: str) -> str:
        """
        Validate ISBN-13 format.

        ISBNs can include hyphens and spaces, which we strip for storage.
        """
        cleaned = re.sub(r"[-\s]", "", v)
        if not re.fullmatch(r"\d{13}", cleaned):
            raise ValueError("ISBN-13 must be exactly 13 digits (excluding hyphens)")
        return cleaned

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Validate and normalize title."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip()

    @field_validator("subtitle", "publisher")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional strings as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "A Series of Unfortunate Events",
        "subtitle": "The Bad Beginning",
        "authors": [{"id": 1, "pseudonym": "Lemony Snicket"}],
        "totalPages": 176,
        "publisher": "HarperCollins",
        "publishedDate": "1999-08-25",
        "isbn13": "9780064407663"
    }
    """

    authors: list[AuthorOfBookRequest] = Field(
        ...,
        min_length=1,
        description="Authors of the book, in cover order",
    )


class BookUpdate(BookCreate):
    """Schema for replacing an existing book's fields (authors included)."""
    pass


class BookResponse(BookBase):
    """
    Schema for book responses.

    Built straight from the ORM object; Book.authors yields the linked
    Author rows in order, each reduced to id and pseudonym.
    """

    id: int = Field(..., description="Unique identifier")

    authors: list[AuthorOfBookResponse] = Field(
        default=[],
        description="Authors of the book, in cover order",
    )
