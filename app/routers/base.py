"""
Route Tables

Controllers don't decorate their methods. Each one lists its endpoints
in a routes() table of Route entries, and register_routes() adds them to
an APIRouter:

    router = APIRouter(prefix="/author", tags=["Authors"])
    register_routes(router, controller.routes())

Service errors reach the controllers as Err values; error_response()
turns them into the envelope with the matching HTTP status.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.schemas.envelope import Envelope
from app.services.result import Err, ErrorKind
from app.utils.responses import send_response

# HTTP status for each kind of service error
ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
}

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def parse_id(raw: str) -> int:
    """
    Convert a path id to an int.

    Only ASCII digits with an optional sign, within the signed 64-bit
    range, are accepted. Anything else raises ValueError, which the
    catch-all handler answers with a 500.
    """
    if not _ID_PATTERN.fullmatch(raw):
        raise ValueError(f"Malformed id: {raw!r}")
    value = int(raw)
    if not _ID_MIN <= value <= _ID_MAX:
        raise ValueError(f"Id out of range: {raw!r}")
    return value


@dataclass(frozen=True)
class Route:
    """One endpoint of a controller's route table."""

    method: str
    path: str
    endpoint: Callable[..., Any]
    summary: str
    status_code: int = status.HTTP_200_OK


def register_routes(router: APIRouter, routes: Iterable[Route]) -> APIRouter:
    """Add every route of a table to the router."""
    for route in routes:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            summary=route.summary,
            status_code=route.status_code,
            response_model=Envelope,
            response_model_exclude_none=True,
        )
    return router


def error_response(result: Err) -> JSONResponse:
    """Translate a service error into the error envelope."""
    return send_response(ERROR_STATUS[result.error.kind], result.error.message)
