"""
Utilities Package

Helpers shared by the routers and the application factory:
- responses.py: the response envelope builder
- validation.py: request body validation returning field errors
"""

from app.utils.responses import build_envelope, send_response
from app.utils.validation import (
    INVALID_REQUEST,
    field_errors,
    validate_payload,
    validation_failed,
)

__all__ = [
    "build_envelope",
    "send_response",
    "INVALID_REQUEST",
    "field_errors",
    "validate_payload",
    "validation_failed",
]
