"""
Author Model

Represents an author in the library database.

SQLAlchemy 2.0 Features Used:
- mapped_column(): Columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Relationship to the book_authors association rows
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, IdType

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from app.models.book import Book, BookAuthor


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - book_links: One-to-Many to the BookAuthor association rows
    - books: Read-only list of the books the author wrote

    Indexes:
    - Primary key on id (automatic)
    - name: For uniqueness checks and sorting

    Example:
        author = Author(
            name="Daniel Handler",
            pseudonym="Lemony Snicket",
            nationality="American",
            birth_date=date(1970, 2, 28),
        )
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(IdType, primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    name: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author's display name"
    )

    pseudonym: Mapped[str | None] = mapped_column(
        String(255),
        index=True,
        nullable=True,
        comment="Pen name the author publishes under"
    )

    nationality: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Author's nationality"
    )

    birth_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="Author's date of birth"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # delete-orphan removes the association rows when the author is deleted,
    # so the author simply disappears from the books' author lists.
    book_links: Mapped[list["BookAuthor"]] = relationship(
        "BookAuthor",
        back_populates="author",
        cascade="all, delete-orphan",
    )

    @property
    def books(self) -> list["Book"]:
        """Books written by this author, in id order."""
        return sorted((link.book for link in self.book_links), key=lambda b: b.id)

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}', pseudonym='{self.pseudonym}')"
