"""
Pagination Service

Runs a SELECT one page at a time and describes the page with metadata.

The database does the work:
- COUNT(*) over the unpaginated statement gives total_elements
- ORDER BY <sort column>, id  keeps the order total and deterministic
- OFFSET page * size / LIMIT size cuts the page out
- Pages past the last row are empty and skip the page query

Ties on the sort column are broken by id in the SAME direction, so the
descending listing is exactly the ascending listing reversed.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.interfaces import ORMOption
from sqlalchemy.sql.elements import ColumnElement

from app.schemas.envelope import FieldError, PageMetadata

T = TypeVar("T")


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageRequest:
    """
    Which page of a listing to return and how to order it.

    Attributes:
        page: Zero-based page number
        size: Number of items per page
        sort_field: Wire name of the field to sort by (e.g. "publishedDate")
        direction: Ascending or descending
    """

    page: int = 0
    size: int = 5
    sort_field: str = "id"
    direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        """Rows to skip before this page starts."""
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus its metadata."""

    items: list[T]
    metadata: PageMetadata


def parse_sort(sort: str) -> tuple[str, str]:
    """
    Split a "field[,direction]" sort parameter.

    Examples:
        "subtitle,desc" -> ("subtitle", "desc")
        "title"         -> ("title", "asc")
    """
    field, _, direction = sort.partition(",")
    return field.strip(), (direction.strip().lower() or SortDirection.ASC.value)


def build_page_request(
    page: int,
    size: int,
    sort: str,
    sortable_fields: Sequence[str],
) -> tuple[PageRequest | None, list[FieldError]]:
    """
    Build a PageRequest, collecting field errors for a bad sort parameter.

    page and size bounds are enforced by the query parameter declarations;
    only the entity-specific sort field is checked here.

    Returns:
        (PageRequest, []) when valid, (None, errors) otherwise
    """
    field, direction = parse_sort(sort)
    errors = []

    if field not in sortable_fields:
        errors.append(FieldError(
            field="sort",
            message=f"Cannot sort by '{field}'. Sortable fields: {', '.join(sortable_fields)}",
        ))
    if direction not in {d.value for d in SortDirection}:
        errors.append(FieldError(
            field="sort",
            message=f"Sort direction must be 'asc' or 'desc', not '{direction}'",
        ))

    if errors:
        return None, errors

    return PageRequest(
        page=page,
        size=size,
        sort_field=field,
        direction=SortDirection(direction),
    ), []


def paginate(
    db: Session,
    stmt: Select[Any],
    page_request: PageRequest,
    sort_columns: Mapping[str, ColumnElement[Any]],
    options: Sequence[ORMOption] = (),
) -> Page[Any]:
    """
    Fetch one page of ORM objects for a select statement.

    Args:
        db: Database session
        stmt: Unordered, unpaginated select of one entity
        page_request: Page number, size and ordering
        sort_columns: Map of wire field name to column; must contain "id"
        options: Loader options (e.g. selectinload) for the page query

    Returns:
        Page holding the ORM objects and the pagination metadata
    """
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total_elements = db.execute(count_stmt).scalar_one()

    columns = [sort_columns[page_request.sort_field]]
    if page_request.sort_field != "id":
        columns.append(sort_columns["id"])
    if page_request.direction == SortDirection.DESC:
        order_by = [c.desc() for c in columns]
    else:
        order_by = [c.asc() for c in columns]

    # A page past the last row is empty; the offset may not even fit the
    # database integer type, so it is never sent.
    items: list[Any] = []
    if page_request.offset < total_elements:
        page_stmt = (
            stmt.options(*options)
            .order_by(*order_by)
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        items = list(db.execute(page_stmt).scalars().all())

    metadata = PageMetadata(
        page_number=page_request.page,
        page_size=page_request.size,
        number_of_elements=len(items),
        total_pages=math.ceil(total_elements / page_request.size),
        total_elements=total_elements,
    )
    return Page(items=items, metadata=metadata)
