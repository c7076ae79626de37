"""
Books Router

CRUD endpoints for books, under /api/v1/book:

    GET    /findAll?page&size&sort   one page of books + metadata
    GET    /find/{book_id}           one book
    POST   /save                     create a book               (201)
    PUT    /update/{book_id}         replace a book's fields
    DELETE /delete/{book_id}         delete a book

A book references its authors by id:

    {"title": "...", "authors": [{"id": 1}], "totalPages": 176,
     "isbn13": "9780064407663", ...}

Errors:
- 400: invalid body or paging parameters (field errors in "data")
- 404: unknown book, or unknown author id in the body
- 409: the ISBN-13 belongs to another book
"""

import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.dependencies import DbSession, Paging
from app.routers.base import Route, error_response, parse_id, register_routes
from app.schemas import BookCreate, BookUpdate
from app.services.books import BOOK_SORT_COLUMNS, BookService
from app.services.pagination import build_page_request
from app.services.result import Err
from app.utils.responses import send_response
from app.utils.validation import validate_payload, validation_failed

logger = logging.getLogger(__name__)

JsonBody = Annotated[dict[str, Any], Body()]


class BookController:
    """
    HTTP layer of the book slice.

    Args:
        service_factory: Builds the BookService for a request's session
    """

    def __init__(
        self,
        service_factory: Callable[[Session], BookService] = BookService,
    ) -> None:
        self.service_factory = service_factory

    def routes(self) -> list[Route]:
        return [
            Route("GET", "/findAll", self.find_all, "Find all books"),
            Route("GET", "/find/{book_id}", self.find_by_id, "Find a book by ID"),
            Route("POST", "/save", self.save, "Save a new book", status.HTTP_201_CREATED),
            Route("PUT", "/update/{book_id}", self.update, "Update a book"),
            Route("DELETE", "/delete/{book_id}", self.delete_by_id, "Delete a book"),
        ]

    def router(self) -> APIRouter:
        router = APIRouter(
            prefix="/book",
            tags=["Books"],
            responses={
                404: {"description": "Book (or referenced author) not found"},
                409: {"description": "ISBN-13 already in use"},
            },
        )
        return register_routes(router, self.routes())

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------
    def find_all(self, db: DbSession, paging: Paging) -> JSONResponse:
        """List books one page at a time (defaults: page 0, size 5, id asc)."""
        page_request, errors = build_page_request(
            paging.page, paging.size, paging.sort, list(BOOK_SORT_COLUMNS)
        )
        if errors:
            return validation_failed(errors)

        result = self.service_factory(db).find_all(page_request)
        if isinstance(result, Err):
            return error_response(result)

        logger.info("Books found.")
        return send_response(
            status.HTTP_200_OK, "Found books!", result.value.items, result.value.metadata
        )

    def find_by_id(self, book_id: str, db: DbSession) -> JSONResponse:
        """Get a single book by ID (non-numeric ids end up as a 500)."""
        result = self.service_factory(db).find_by_id(parse_id(book_id))
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Book found. ID: {book_id}")
        return send_response(status.HTTP_200_OK, "Found book!", [result.value])

    def save(self, db: DbSession, body: JsonBody) -> JSONResponse:
        """Create a new book linked to existing authors."""
        payload, errors = validate_payload(BookCreate, body)
        if errors:
            return validation_failed(errors)

        result = self.service_factory(db).save(payload)
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Book saved. ID: {result.value.id}")
        return send_response(status.HTTP_201_CREATED, "Saved book!", [result.value])

    def update(self, book_id: str, db: DbSession, body: JsonBody) -> JSONResponse:
        """Replace the fields and authors of an existing book."""
        target_id = parse_id(book_id)
        payload, errors = validate_payload(BookUpdate, body)
        if errors:
            return validation_failed(errors)

        result = self.service_factory(db).update(target_id, payload)
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Book updated. ID: {book_id}")
        return send_response(status.HTTP_200_OK, "Updated book!", [result.value])

    def delete_by_id(self, book_id: str, db: DbSession) -> JSONResponse:
        """Delete a book. A missing book is a 404, not a no-op."""
        result = self.service_factory(db).delete_by_id(parse_id(book_id))
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Book deleted. ID: {book_id}")
        return send_response(status.HTTP_200_OK, "Deleted book!")
