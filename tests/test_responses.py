"""
Tests for the Response Envelope and Validation Helpers

These are plain unit tests: no database and no HTTP client.
"""

import json
from datetime import date

from fastapi import status

from app.schemas import AuthorCreate, AuthorResponse, BookCreate, FieldError, PageMetadata
from app.utils.responses import build_envelope, send_response
from app.utils.validation import field_errors, validate_payload, validation_failed


class TestBuildEnvelope:
    """Tests for build_envelope()."""

    def test_message_only(self):
        assert build_envelope(status.HTTP_200_OK, "Deleted book!") == {
            "message": "Deleted book!"
        }

    def test_error_status_uses_error_key(self):
        assert build_envelope(status.HTTP_404_NOT_FOUND, "Book not found!") == {
            "error": "Book not found!"
        }

    def test_error_flag_overrides_status(self):
        body = build_envelope(status.HTTP_200_OK, "odd", error=True)
        assert body == {"error": "odd"}

        body = build_envelope(status.HTTP_400_BAD_REQUEST, "odd", error=False)
        assert body == {"message": "odd"}

    def test_models_dumped_with_camel_case_names(self):
        author = AuthorResponse(
            id=1,
            name="Daniel Handler",
            pseudonym="Lemony Snicket",
            birth_date=date(1970, 2, 28),
        )

        body = build_envelope(status.HTTP_200_OK, "Found author!", [author])

        assert body["data"] == [{
            "id": 1,
            "name": "Daniel Handler",
            "pseudonym": "Lemony Snicket",
            "nationality": None,
            "birthDate": "1970-02-28",
        }]
        assert "metadata" not in body

    def test_metadata_included(self):
        metadata = PageMetadata(
            page_number=1,
            page_size=5,
            number_of_elements=2,
            total_pages=2,
            total_elements=7,
        )

        body = build_envelope(status.HTTP_200_OK, "Found books!", [], metadata)

        assert body["data"] == []
        assert body["metadata"] == {
            "pageNumber": 1,
            "pageSize": 5,
            "numberOfElements": 2,
            "totalPages": 2,
            "totalElements": 7,
        }

    def test_plain_dicts_pass_through(self):
        body = build_envelope(status.HTTP_200_OK, "ok", [{"a": 1}])
        assert body["data"] == [{"a": 1}]


class TestSendResponse:
    """Tests for send_response()."""

    def test_status_and_body(self):
        response = send_response(status.HTTP_201_CREATED, "Saved book!", [{"id": 5}])

        assert response.status_code == status.HTTP_201_CREATED
        assert json.loads(response.body) == {"message": "Saved book!", "data": [{"id": 5}]}
        assert response.headers["content-type"] == "application/json"


class TestValidatePayload:
    """Tests for validate_payload() and field_errors()."""

    def test_valid_payload(self):
        author, errors = validate_payload(AuthorCreate, {"name": " Jane Austen "})

        assert errors == []
        assert author.name == "Jane Austen"

    def test_invalid_payload_lists_fields(self):
        author, errors = validate_payload(
            BookCreate,
            {"title": "x", "totalPages": -1, "isbn13": "1", "authors": [{"id": 0}]},
        )

        assert author is None
        assert {e.field for e in errors} == {"totalPages", "isbn13", "authors.0.id"}

    def test_value_error_prefix_removed(self):
        _, errors = validate_payload(AuthorCreate, {"name": "  "})

        assert errors == [
            FieldError(field="name", message="Name cannot be empty or whitespace")
        ]

    def test_location_prefix_removed(self):
        errors = field_errors([
            {"loc": ("query", "size"), "msg": "Input should be less than or equal to 100"},
            {"loc": ("body",), "msg": "Input should be a valid dictionary"},
        ])

        assert [e.field for e in errors] == ["size", "body"]

    def test_validation_failed_response(self):
        response = validation_failed([FieldError(field="name", message="Field required")])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert json.loads(response.body) == {
            "error": "Invalid request!",
            "data": [{"field": "name", "message": "Field required"}],
        }
