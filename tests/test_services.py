"""
Tests for the Service Layer

Services are exercised directly against the test session, without HTTP.
They must report business failures as Err values, never as exceptions.
The path id parser the controllers hand ids through is tested here too.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from app.routers.base import parse_id
from app.schemas import AuthorCreate, AuthorUpdate, BookCreate
from app.services.authors import AuthorService
from app.services.books import BookService
from app.services.pagination import PageRequest, SortDirection, build_page_request, parse_sort
from app.services.result import Err, ErrorKind, Ok


class TestParseSort:
    """Tests for parse_sort()."""

    @pytest.mark.parametrize(
        "sort, expected",
        [
            ("id", ("id", "asc")),
            ("id,asc", ("id", "asc")),
            ("subtitle,desc", ("subtitle", "desc")),
            ("subtitle,DESC", ("subtitle", "desc")),
            (" title , desc ", ("title", "desc")),
        ],
    )
    def test_parse_sort(self, sort, expected):
        assert parse_sort(sort) == expected


class TestBuildPageRequest:
    """Tests for build_page_request()."""

    def test_valid_request(self):
        page_request, errors = build_page_request(2, 10, "name,desc", ["id", "name"])

        assert errors == []
        assert page_request == PageRequest(
            page=2, size=10, sort_field="name", direction=SortDirection.DESC
        )
        assert page_request.offset == 20

    def test_unknown_field_and_direction(self):
        page_request, errors = build_page_request(0, 5, "price,up", ["id", "name"])

        assert page_request is None
        assert len(errors) == 2
        assert all(e.field == "sort" for e in errors)


class TestAuthorService:
    """Tests for AuthorService."""

    def test_save_and_find(self, db_session):
        service = AuthorService(db_session)

        saved = service.save(AuthorCreate(name="Jane Austen", nationality="British"))
        assert isinstance(saved, Ok)

        found = service.find_by_id(saved.value.id)
        assert isinstance(found, Ok)
        assert found.value.name == "Jane Austen"
        assert found.value.books == []

    def test_find_missing(self, db_session):
        result = AuthorService(db_session).find_by_id(12345)

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.message == "Author not found!"

    def test_save_duplicate(self, db_session, sample_author):
        result = AuthorService(db_session).save(
            AuthorCreate(name="Daniel Handler", pseudonym="Lemony Snicket")
        )

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.ALREADY_EXISTS

    def test_update_missing(self, db_session):
        result = AuthorService(db_session).update(12345, AuthorUpdate(name="Nobody"))

        assert isinstance(result, Err)
        assert result.error.message == "Author does not exist!"

    def test_delete_then_find(self, db_session, sample_author):
        service = AuthorService(db_session)
        author_id = sample_author.id

        assert service.delete_by_id(author_id) == Ok(None)
        assert isinstance(service.find_by_id(author_id), Err)
        assert isinstance(service.delete_by_id(author_id), Err)

    def test_find_all_page(self, db_session, sample_author, second_author):
        result = AuthorService(db_session).find_all(PageRequest(page=0, size=1))

        assert isinstance(result, Ok)
        assert [a.id for a in result.value.items] == [sample_author.id]
        assert result.value.metadata.total_pages == 2
        assert result.value.metadata.number_of_elements == 1


class TestBookService:
    """Tests for BookService."""

    def _create(self, author_id, isbn13="9780064408639"):
        return BookCreate(
            title="A Series of Fortunate Events",
            total_pages=231,
            isbn13=isbn13,
            authors=[{"id": author_id}],
        )

    def test_save_and_find(self, db_session, sample_author):
        service = BookService(db_session)

        saved = service.save(self._create(sample_author.id))
        assert isinstance(saved, Ok)
        assert saved.value.authors[0].pseudonym == "Lemony Snicket"

        found = service.find_by_id(saved.value.id)
        assert found == saved

    def test_save_duplicate_isbn(self, db_session, sample_book, sample_author):
        result = BookService(db_session).save(self._create(sample_author.id, sample_book.isbn13))

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.ALREADY_EXISTS
        assert result.error.message == "Book already exists!"

    def test_save_unknown_author(self, db_session):
        result = BookService(db_session).save(self._create(4242))

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.message == "Author not found!"

    def test_update_keeps_id(self, db_session, sample_book, sample_author):
        payload = self._create(sample_author.id)

        result = BookService(db_session).update(sample_book.id, payload)

        assert isinstance(result, Ok)
        assert result.value.id == sample_book.id
        assert result.value.isbn13 == payload.isbn13
        assert result.value.subtitle is None

    def test_update_missing(self, db_session, sample_author):
        result = BookService(db_session).update(4242, self._create(sample_author.id))

        assert isinstance(result, Err)
        assert result.error.message == "Book does not exist!"

    def test_delete_missing(self, db_session):
        result = BookService(db_session).delete_by_id(4242)

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.NOT_FOUND

    def test_find_all_sorted_desc(self, db_session, series_books):
        result = BookService(db_session).find_all(
            PageRequest(page=0, size=2, sort_field="subtitle", direction=SortDirection.DESC)
        )

        assert [b.subtitle for b in result.value.items] == [
            "The Wide Window",
            "The Reptile Room",
        ]
        assert result.value.metadata.total_elements == 4
        assert result.value.metadata.total_pages == 2

    def test_find_all_page_beyond_any_offset(self, db_session, many_books):
        result = BookService(db_session).find_all(PageRequest(page=10**17, size=100))

        assert result.value.items == []
        assert result.value.metadata.total_elements == 12
        assert result.value.metadata.number_of_elements == 0

    def test_update_isbn_taken_during_commit(
        self, db_session, monkeypatch, series_books, sample_author
    ):
        """A concurrent insert of the same ISBN-13 is reported as a conflict."""
        rollbacks = []

        def failing_commit():
            raise IntegrityError("UPDATE books", {}, Exception("UNIQUE constraint failed"))

        monkeypatch.setattr(db_session, "commit", failing_commit)
        monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append(True))

        result = BookService(db_session).update(series_books[0].id, self._create(sample_author.id))

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.ALREADY_EXISTS
        assert result.error.message == "Book already exists!"
        assert rollbacks == [True]


class TestParseId:
    """Tests for parse_id()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("7", 7),
            ("-3", -3),
            ("+12", 12),
            ("007", 7),
            ("9223372036854775807", 2**63 - 1),
        ],
    )
    def test_valid_ids(self, raw, expected):
        assert parse_id(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["", "one", "1_000", "1.0", " 1", "١٢", "9223372036854775808", "-9223372036854775809"]
    )
    def test_malformed_ids(self, raw):
        with pytest.raises(ValueError):
            parse_id(raw)
