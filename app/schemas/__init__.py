"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

Schema Naming Convention:
- XxxBase: Shared fields between create/update
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields sent when replacing a record
- XxxResponse: Fields returned in API responses
"""

from app.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
    BookOfAuthorResponse,
)
from app.schemas.base import CamelModel
from app.schemas.book import (
    AuthorOfBookRequest,
    AuthorOfBookResponse,
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from app.schemas.envelope import Envelope, FieldError, PageMetadata

__all__ = [
    "CamelModel",
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    "AuthorDetailResponse",
    "BookOfAuthorResponse",
    # Book schemas
    "AuthorOfBookRequest",
    "AuthorOfBookResponse",
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    # Envelope schemas
    "Envelope",
    "FieldError",
    "PageMetadata",
]
