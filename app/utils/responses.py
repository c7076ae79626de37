"""
Response Envelope Builder

Every endpoint answers with the same JSON shape:

    success: {"message": "Found book!", "data": [...], "metadata": {...}}
    failure: {"error": "Book not found!"}

send_response() is the only place that shape is built. It is a pure
function of its arguments (apart from a debug log line).
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.schemas.envelope import PageMetadata

logger = logging.getLogger(__name__)


def _to_json(item: Any) -> Any:
    """Dump Pydantic models with their wire (camelCase) names."""
    if isinstance(item, BaseModel):
        return item.model_dump(by_alias=True, mode="json")
    return item


def build_envelope(
    status_code: int,
    text: str,
    data: Sequence[Any] | None = None,
    metadata: PageMetadata | None = None,
    *,
    error: bool | None = None,
) -> dict[str, Any]:
    """
    Build the envelope body.

    Args:
        status_code: HTTP status of the response
        text: Message (success) or error description (failure)
        data: Result items; the key is omitted when None
        metadata: Pagination metadata; the key is omitted when None
        error: Force the text under "error" (True) or "message" (False);
            by default statuses >= 400 are errors

    Returns:
        JSON-compatible dict
    """
    if error is None:
        error = status_code >= 400

    body: dict[str, Any] = {"error" if error else "message": text}
    if data is not None:
        body["data"] = [_to_json(item) for item in data]
    if metadata is not None:
        body["metadata"] = _to_json(metadata)
    return body


def send_response(
    status_code: int,
    text: str,
    data: Sequence[Any] | None = None,
    metadata: PageMetadata | None = None,
    *,
    error: bool | None = None,
) -> JSONResponse:
    """
    Wrap a result in the envelope and return it with its status code.

    Usage:
        return send_response(status.HTTP_200_OK, "Found book!", [book])
        return send_response(status.HTTP_404_NOT_FOUND, "Book not found!")
    """
    logger.debug(f"Sending {status_code} response: {text}")
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(status_code, text, data, metadata, error=error),
    )
