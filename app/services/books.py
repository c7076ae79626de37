"""
Book Service

Business rules for books:
- Lookups by id, with a NotFound error when the id is unknown
- The ISBN-13 is the business key: saving a duplicate, or updating a book
  to another book's ISBN-13, is an AlreadyExists error
- Author references are resolved by id; an unknown author is a NotFound
  error and nothing is written
- Updates replace every mutable field (authors included) and keep the id
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models import Author, Book, BookAuthor
from app.schemas import AuthorOfBookRequest, BookCreate, BookResponse, BookUpdate
from app.services.pagination import Page, PageRequest, paginate
from app.services.result import Err, Ok, Result, already_exists, not_found

logger = logging.getLogger(__name__)

# Wire field name -> column, for the sort query parameter
BOOK_SORT_COLUMNS = {
    "id": Book.id,
    "title": Book.title,
    "subtitle": Book.subtitle,
    "totalPages": Book.total_pages,
    "publisher": Book.publisher,
    "publishedDate": Book.published_date,
    "isbn13": Book.isbn13,
}

BOOK_NOT_FOUND = "Book not found!"
BOOK_DOES_NOT_EXIST = "Book does not exist!"
BOOK_ALREADY_EXISTS = "Book already exists!"
AUTHOR_NOT_FOUND = "Author not found!"

# Loads each book's ordered authors alongside the books
_WITH_AUTHORS = selectinload(Book.author_links).selectinload(BookAuthor.author)

# Everything a request can set except the author list
_SCALAR_FIELDS = {"title", "subtitle", "total_pages", "publisher", "published_date", "isbn13"}


class BookService:
    """CRUD operations on books."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def find_all(self, page_request: PageRequest) -> Result[Page[BookResponse]]:
        """Return one page of books; an empty page is still a success."""
        page = paginate(
            self.db,
            select(Book),
            page_request,
            BOOK_SORT_COLUMNS,
            options=[_WITH_AUTHORS],
        )
        return Ok(Page(
            items=[BookResponse.model_validate(b) for b in page.items],
            metadata=page.metadata,
        ))

    def find_by_id(self, book_id: int) -> Result[BookResponse]:
        book = self._get(book_id)
        if book is None:
            logger.warning(f"Book lookup failed. ID: {book_id}")
            return not_found(BOOK_NOT_FOUND)
        return Ok(BookResponse.model_validate(book))

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------
    def save(self, payload: BookCreate) -> Result[BookResponse]:
        """
        Persist a new book linked to existing authors.

        Fails with AlreadyExists when the ISBN-13 is taken and with
        NotFound when an author id is unknown; nothing is written then.
        """
        if self._isbn_taken(payload.isbn13):
            logger.warning(f"Book already exists. ISBN-13: {payload.isbn13}")
            return already_exists(BOOK_ALREADY_EXISTS)

        authors = self._resolve_authors(payload.authors)
        if isinstance(authors, Err):
            return authors

        book = Book(**payload.model_dump(include=_SCALAR_FIELDS))
        book.set_authors(authors.value)
        self.db.add(book)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request stored the same ISBN-13 after our check
            self.db.rollback()
            return already_exists(BOOK_ALREADY_EXISTS)

        return Ok(BookResponse.model_validate(self._get(book.id)))

    def update(self, book_id: int, payload: BookUpdate) -> Result[BookResponse]:
        """
        Replace the fields and the author list of an existing book.

        Fails with NotFound for an unknown book or author id, and with
        AlreadyExists when the ISBN-13 belongs to a different book.
        """
        book = self._get(book_id)
        if book is None:
            logger.warning(f"Book update failed, no such book. ID: {book_id}")
            return not_found(BOOK_DOES_NOT_EXIST)

        if self._isbn_taken(payload.isbn13, exclude_id=book_id):
            logger.warning(f"Book update collides on ISBN-13 {payload.isbn13}. ID: {book_id}")
            return already_exists(BOOK_ALREADY_EXISTS)

        authors = self._resolve_authors(payload.authors)
        if isinstance(authors, Err):
            return authors

        for field, value in payload.model_dump(include=_SCALAR_FIELDS).items():
            setattr(book, field, value)

        try:
            # The old link rows share primary keys with the new ones, so they
            # have to be deleted before the new ones are inserted.
            book.author_links.clear()
            self.db.flush()
            book.set_authors(authors.value)
            self.db.commit()
        except IntegrityError:
            # Another book took this ISBN-13 after our check
            self.db.rollback()
            return already_exists(BOOK_ALREADY_EXISTS)

        return Ok(BookResponse.model_validate(self._get(book_id)))

    def delete_by_id(self, book_id: int) -> Result[None]:
        """Delete a book. Deleting an unknown id is an error, not a no-op."""
        book = self.db.get(Book, book_id)
        if book is None:
            logger.warning(f"Book delete failed, no such book. ID: {book_id}")
            return not_found(BOOK_DOES_NOT_EXIST)

        self.db.delete(book)
        self.db.commit()
        return Ok(None)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _get(self, book_id: int) -> Book | None:
        stmt = select(Book).options(_WITH_AUTHORS).where(Book.id == book_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def _isbn_taken(self, isbn13: str, exclude_id: int | None = None) -> bool:
        stmt = select(Book.id).where(Book.isbn13 == isbn13)
        if exclude_id is not None:
            stmt = stmt.where(Book.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def _resolve_authors(self, refs: list[AuthorOfBookRequest]) -> Result[list[Author]]:
        """
        Load the referenced authors in request order.

        Repeated ids are collapsed, keeping the first occurrence.
        """
        author_ids = list(dict.fromkeys(ref.id for ref in refs))
        stmt = select(Author).where(Author.id.in_(author_ids))
        found = {author.id: author for author in self.db.execute(stmt).scalars()}

        missing = [author_id for author_id in author_ids if author_id not in found]
        if missing:
            logger.warning(f"Unknown author ids in book request: {missing}")
            return not_found(AUTHOR_NOT_FOUND)

        return Ok([found[author_id] for author_id in author_ids])
