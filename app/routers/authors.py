"""
Authors Router

CRUD endpoints for authors, under /api/v1/author:

    GET    /findAll?page&size&sort   one page of authors + metadata
    GET    /find/{author_id}         one author
    POST   /save                     create an author            (201)
    PUT    /update/{author_id}       replace an author's fields
    DELETE /delete/{author_id}       delete an author
"""

import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.dependencies import DbSession, Paging
from app.routers.base import Route, error_response, parse_id, register_routes
from app.schemas import AuthorCreate, AuthorUpdate
from app.services.authors import AUTHOR_SORT_COLUMNS, AuthorService
from app.services.pagination import build_page_request
from app.services.result import Err
from app.utils.responses import send_response
from app.utils.validation import validate_payload, validation_failed

logger = logging.getLogger(__name__)

JsonBody = Annotated[dict[str, Any], Body()]


class AuthorController:
    """
    HTTP layer of the author slice.

    Args:
        service_factory: Builds the AuthorService for a request's session
    """

    def __init__(
        self,
        service_factory: Callable[[Session], AuthorService] = AuthorService,
    ) -> None:
        self.service_factory = service_factory

    def routes(self) -> list[Route]:
        return [
            Route("GET", "/findAll", self.find_all, "Find all authors"),
            Route("GET", "/find/{author_id}", self.find_by_id, "Find an author by ID"),
            Route("POST", "/save", self.save, "Save a new author", status.HTTP_201_CREATED),
            Route("PUT", "/update/{author_id}", self.update, "Update an author"),
            Route("DELETE", "/delete/{author_id}", self.delete_by_id, "Delete an author"),
        ]

    def router(self) -> APIRouter:
        router = APIRouter(
            prefix="/author",
            tags=["Authors"],
            responses={404: {"description": "Author not found"}},
        )
        return register_routes(router, self.routes())

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------
    def find_all(self, db: DbSession, paging: Paging) -> JSONResponse:
        """List authors one page at a time (defaults: page 0, size 5, id asc)."""
        page_request, errors = build_page_request(
            paging.page, paging.size, paging.sort, list(AUTHOR_SORT_COLUMNS)
        )
        if errors:
            return validation_failed(errors)

        result = self.service_factory(db).find_all(page_request)
        if isinstance(result, Err):
            return error_response(result)

        logger.info("Authors found.")
        return send_response(
            status.HTTP_200_OK, "Found authors!", result.value.items, result.value.metadata
        )

    def find_by_id(self, author_id: str, db: DbSession) -> JSONResponse:
        """
        Get a single author by ID.

        author_id is declared as a string and converted here, so a
        malformed id is an internal error rather than a 4xx.
        """
        result = self.service_factory(db).find_by_id(parse_id(author_id))
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Author found. ID: {author_id}")
        return send_response(status.HTTP_200_OK, "Found author!", [result.value])

    def save(self, db: DbSession, body: JsonBody) -> JSONResponse:
        """Create a new author."""
        payload, errors = validate_payload(AuthorCreate, body)
        if errors:
            return validation_failed(errors)

        result = self.service_factory(db).save(payload)
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Author saved. ID: {result.value.id}")
        return send_response(status.HTTP_201_CREATED, "Saved author!", [result.value])

    def update(self, author_id: str, db: DbSession, body: JsonBody) -> JSONResponse:
        """Replace the fields of an existing author."""
        target_id = parse_id(author_id)
        payload, errors = validate_payload(AuthorUpdate, body)
        if errors:
            return validation_failed(errors)

        result = self.service_factory(db).update(target_id, payload)
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Author updated. ID: {author_id}")
        return send_response(status.HTTP_200_OK, "Updated author!", [result.value])

    def delete_by_id(self, author_id: str, db: DbSession) -> JSONResponse:
        """Delete an author. A missing author is a 404, not a no-op."""
        result = self.service_factory(db).delete_by_id(parse_id(author_id))
        if isinstance(result, Err):
            return error_response(result)

        logger.info(f"Author deleted. ID: {author_id}")
        return send_response(status.HTTP_200_OK, "Deleted author!")
