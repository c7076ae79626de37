"""
Book Model

Represents books in the library database.

This file also contains the BookAuthor association model.

WHY an Association Model instead of a plain Table?
==================================================
A book's authors form an ORDERED list (the order printed on the cover).
A plain many-to-many Table can't remember that order, so each link row
carries a position column and the Book relationship is ordered by it.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, IdType

if TYPE_CHECKING:
    from app.models.author import Author


class BookAuthor(Base):
    """
    Link between a book and one of its authors.

    Table: book_authors

    The composite primary key (book_id, author_id) prevents listing the
    same author twice on one book.
    """

    __tablename__ = "book_authors"

    book_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    author_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("authors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Zero-based position of the author in the book's author list",
    )

    book: Mapped["Book"] = relationship("Book", back_populates="author_links")
    author: Mapped["Author"] = relationship("Author", back_populates="book_links")

    def __repr__(self) -> str:
        return (
            f"BookAuthor(book_id={self.book_id}, author_id={self.author_id}, "
            f"position={self.position})"
        )


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - subtitle: Book subtitle
    - total_pages: Number of pages
    - publisher: Publishing house
    - published_date: When the book was published
    - isbn13: ISBN-13, unique business key

    Relationships:
    - author_links: Ordered BookAuthor rows
    - authors: Read-only ordered list of Author objects

    Example:
        book = Book(
            title="A Series of Unfortunate Events",
            subtitle="The Bad Beginning",
            total_pages=176,
            publisher="HarperCollins",
            published_date=date(1999, 8, 25),
            isbn13="9780064407663",
        )
        book.set_authors([snicket])
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(IdType, primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    subtitle: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Book subtitle"
    )

    total_pages: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of pages in the book"
    )

    publisher: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Publishing house"
    )

    # Date (not DateTime) because we only care about the day, not time
    published_date: Mapped[date | None] = mapped_column(
        Date,
        index=True,
        nullable=True,
        comment="Date of publication"
    )

    # No two books share an ISBN-13
    isbn13: Mapped[str] = mapped_column(
        String(13),
        unique=True,
        index=True,
        nullable=False,
        comment="International Standard Book Number (13 digits)"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author_links: Mapped[list[BookAuthor]] = relationship(
        BookAuthor,
        back_populates="book",
        order_by=BookAuthor.position,
        cascade="all, delete-orphan",
    )

    @property
    def authors(self) -> list["Author"]:
        """Authors of the book, in the order they were given."""
        return [link.author for link in self.author_links]

    def set_authors(self, authors: list["Author"]) -> None:
        """
        Link the given authors to this book, numbering their positions.

        Only call this on a book without links; replacing existing links
        needs the old rows flushed away first (see BookService.update).
        """
        self.author_links = [
            BookAuthor(author=author, position=position)
            for position, author in enumerate(authors)
        ]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn13='{self.isbn13}')"
