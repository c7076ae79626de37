"""
Response Envelope Schemas

Every endpoint answers with the same JSON shape:

    {
        "message": "Found books!",          # or "error": "Book not found!"
        "data": [...],                       # omitted when there is no data
        "metadata": {...}                    # only on paginated listings
    }

These models document that shape in OpenAPI and carry the pagination
metadata between the service and the controller.
"""

from typing import Any

from pydantic import ConfigDict, Field

from app.schemas.base import CamelModel


class PageMetadata(CamelModel):
    """
    Pagination metadata for a single page of a larger result set.

    Invariants:
    - total_pages == ceil(total_elements / page_size)
    - number_of_elements <= page_size
    """

    page_number: int = Field(..., ge=0, description="Zero-based page number")
    page_size: int = Field(..., ge=1, description="Requested page size")
    number_of_elements: int = Field(..., ge=0, description="Items on this page")
    total_pages: int = Field(..., ge=0, description="Number of pages")
    total_elements: int = Field(..., ge=0, description="Number of matching items")


class FieldError(CamelModel):
    """A single validation failure, reported in the data list of a 400."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="What is wrong with it")


class Envelope(CamelModel):
    """
    Documentation model of the response envelope.

    Responses are built by app.utils.responses.send_response; this model
    only feeds the OpenAPI schema.
    """

    message: str | None = None
    error: str | None = None
    data: list[Any] | None = None
    metadata: PageMetadata | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Found books!",
                "data": [],
                "metadata": {
                    "pageNumber": 0,
                    "pageSize": 5,
                    "numberOfElements": 0,
                    "totalPages": 0,
                    "totalElements": 0,
                },
            }
        },
    )
