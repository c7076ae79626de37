"""
Request Validation Helpers

Request bodies are validated explicitly, before the service is called:

    author, errors = validate_payload(AuthorCreate, body)
    if errors:
        return validation_failed(errors)

Pydantic does the checking; these helpers turn its error list into
FieldError items ({"field": "authors.0.id", "message": "..."}) for the
400 envelope.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from app.schemas.envelope import FieldError
from app.utils.responses import send_response

ModelT = TypeVar("ModelT", bound=BaseModel)

INVALID_REQUEST = "Invalid request!"

# First element of FastAPI's error locations, naming where the value came from
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def field_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """
    Convert Pydantic/FastAPI error dicts into FieldError items.

    "Value error, " prefixes added by Pydantic for ValueError raised in
    validators are stripped so only our own message remains.
    """
    result = []
    for err in errors:
        message = str(err.get("msg", "Invalid value"))
        message = message.removeprefix("Value error, ")
        result.append(FieldError(field=_field_name(err.get("loc", ())), message=message))
    return result


def validate_payload(
    schema: type[ModelT],
    payload: Any,
) -> tuple[ModelT | None, list[FieldError]]:
    """
    Validate a request body against a schema.

    Returns:
        (model, []) when valid, (None, field errors) otherwise
    """
    try:
        return schema.model_validate(payload), []
    except ValidationError as exc:
        return None, field_errors(exc.errors())


def validation_failed(errors: list[FieldError]) -> JSONResponse:
    """400 envelope listing the field errors as its data."""
    return send_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST, errors)
