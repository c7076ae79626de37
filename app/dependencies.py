"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: one SQLAlchemy session per request
- Paging: page/size/sort query parameters of the findAll endpoints
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def find_all(db: Session = Depends(get_db)):
# routes write:
#   def find_all(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PagingParams:
    """
    Query parameters of the paginated listings.

        GET /api/v1/book/findAll?page=0&size=5&sort=subtitle,desc

    - page: Zero-based page number
    - size: Items per page (1 to max_page_size)
    - sort: "field[,asc|desc]"; which fields are sortable depends on the
      entity, so the router checks the field against its own list
    """

    def __init__(
        self,
        page: int = Query(
            default=0,
            ge=0,
            description="Page number (0-indexed)",
            examples=[0, 1, 2],
        ),
        size: int = Query(
            default=settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description=f"Number of items per page (max {settings.max_page_size})",
            examples=[5, 10, 25],
        ),
        sort: str = Query(
            default="id,asc",
            min_length=1,
            max_length=100,
            description="Sort field and direction, e.g. 'title,desc'",
            examples=["id,asc", "subtitle,desc"],
        ),
    ) -> None:
        self.page = page
        self.size = size
        self.sort = sort


Paging = Annotated[PagingParams, Depends()]
