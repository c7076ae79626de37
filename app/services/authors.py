"""
Author Service

Business rules for authors:
- Lookups by id, with a NotFound error when the id is unknown
- An author is identified by name + pseudonym; saving (or updating into)
  a combination that already exists is an AlreadyExists error
- Updates replace every mutable field and keep the id

The service works on the Session it is constructed with and returns
Ok/Err results instead of raising.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.models import Author, BookAuthor
from app.schemas import AuthorCreate, AuthorDetailResponse, AuthorResponse, AuthorUpdate
from app.services.pagination import Page, PageRequest, paginate
from app.services.result import Ok, Result, already_exists, not_found

logger = logging.getLogger(__name__)

# Wire field name -> column, for the sort query parameter
AUTHOR_SORT_COLUMNS = {
    "id": Author.id,
    "name": Author.name,
    "pseudonym": Author.pseudonym,
    "nationality": Author.nationality,
    "birthDate": Author.birth_date,
}

AUTHOR_NOT_FOUND = "Author not found!"
AUTHOR_DOES_NOT_EXIST = "Author does not exist!"
AUTHOR_ALREADY_EXISTS = "Author already exists!"

# Loads each author's books alongside the authors
_WITH_BOOKS = selectinload(Author.book_links).selectinload(BookAuthor.book)


class AuthorService:
    """CRUD operations on authors."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def find_all(self, page_request: PageRequest) -> Result[Page[AuthorDetailResponse]]:
        """Return one page of authors; an empty page is still a success."""
        page = paginate(
            self.db,
            select(Author),
            page_request,
            AUTHOR_SORT_COLUMNS,
            options=[_WITH_BOOKS],
        )
        return Ok(Page(
            items=[AuthorDetailResponse.model_validate(a) for a in page.items],
            metadata=page.metadata,
        ))

    def find_by_id(self, author_id: int) -> Result[AuthorDetailResponse]:
        author = self._get(author_id)
        if author is None:
            logger.warning(f"Author lookup failed. ID: {author_id}")
            return not_found(AUTHOR_NOT_FOUND)
        return Ok(AuthorDetailResponse.model_validate(author))

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------
    def save(self, payload: AuthorCreate) -> Result[AuthorResponse]:
        """
        Persist a new author.

        Fails with AlreadyExists when an author with the same name and
        pseudonym is already stored; nothing is written in that case.
        """
        if self._exists(payload.name, payload.pseudonym):
            logger.warning(f"Author already exists: {payload.name!r} ({payload.pseudonym!r})")
            return already_exists(AUTHOR_ALREADY_EXISTS)

        author = Author(**payload.model_dump())
        self.db.add(author)
        self.db.commit()
        self.db.refresh(author)

        return Ok(AuthorResponse.model_validate(author))

    def update(self, author_id: int, payload: AuthorUpdate) -> Result[AuthorResponse]:
        """
        Replace the mutable fields of an existing author.

        Fails with NotFound for an unknown id, and with AlreadyExists when
        the new name + pseudonym belong to a different author.
        """
        author = self._get(author_id)
        if author is None:
            logger.warning(f"Author update failed, no such author. ID: {author_id}")
            return not_found(AUTHOR_DOES_NOT_EXIST)

        if self._exists(payload.name, payload.pseudonym, exclude_id=author_id):
            logger.warning(f"Author update collides with another author. ID: {author_id}")
            return already_exists(AUTHOR_ALREADY_EXISTS)

        for field, value in payload.model_dump().items():
            setattr(author, field, value)

        self.db.commit()
        self.db.refresh(author)

        return Ok(AuthorResponse.model_validate(author))

    def delete_by_id(self, author_id: int) -> Result[None]:
        """
        Delete an author; the author is removed from the books they wrote.

        Deleting an unknown id is an error, not a no-op.
        """
        author = self.db.get(Author, author_id)
        if author is None:
            logger.warning(f"Author delete failed, no such author. ID: {author_id}")
            return not_found(AUTHOR_DOES_NOT_EXIST)

        self.db.delete(author)
        self.db.commit()
        return Ok(None)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _get(self, author_id: int) -> Author | None:
        stmt = select(Author).options(_WITH_BOOKS).where(Author.id == author_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def _exists(
        self,
        name: str,
        pseudonym: str | None,
        exclude_id: int | None = None,
    ) -> bool:
        """Check whether an author with this name and pseudonym is stored."""
        stmt = select(Author.id).where(Author.name == name)
        if pseudonym is None:
            stmt = stmt.where(Author.pseudonym.is_(None))
        else:
            stmt = stmt.where(Author.pseudonym == pseudonym)
        if exclude_id is not None:
            stmt = stmt.where(Author.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None
