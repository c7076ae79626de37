"""
Service Results

Services never raise for expected business failures. Every operation
returns either Ok(value) or Err(ServiceError), and the router layer
decides which HTTP status each error kind maps to.

Usage:
    result = service.find_by_id(3)
    if isinstance(result, Err):
        return error_response(result)
    author = result.value
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Categories of business failures a service can report."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"


@dataclass(frozen=True)
class ServiceError:
    """
    A business failure.

    Attributes:
        kind: What went wrong, used to pick the HTTP status
        message: Client-facing description, e.g. "Book not found!"
    """

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the operation's value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the reason."""

    error: ServiceError


Result: TypeAlias = Union[Ok[T], Err]


def not_found(message: str) -> Err:
    return Err(ServiceError(ErrorKind.NOT_FOUND, message))


def already_exists(message: str) -> Err:
    return Err(ServiceError(ErrorKind.ALREADY_EXISTS, message))
