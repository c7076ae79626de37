"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

Pydantic v2 Features Used:
- Field(): Define constraints and metadata
- field_validator: Validate and transform field values
- alias_generator (via CamelModel): camelCase names on the wire
"""

from datetime import date

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class AuthorBase(CamelModel):
    """
    Base schema with shared author fields.

    Updates replace every mutable field, so create and update share
    exactly these rules.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's display name",
        examples=["Daniel Handler"],
    )

    pseudonym: str | None = Field(
        default=None,
        max_length=255,
        description="Pen name the author publishes under",
        examples=["Lemony Snicket"],
    )

    nationality: str | None = Field(
        default=None,
        max_length=100,
        description="Author's nationality",
        examples=["American"],
    )

    birth_date: date | None = Field(
        default=None,
        description="Author's date of birth",
        examples=["1970-02-28"],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """
        Validate that name is not just whitespace.

        Args:
            v: The value being validated

        Returns:
            The stripped name

        Raises:
            ValueError: If the name is blank
        """
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()

    @field_validator("pseudonym", "nationality")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional strings as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("birth_date")
    @classmethod
    def birth_date_not_in_future(cls, v: date | None) -> date | None:
        """An author can't be born after today."""
        if v is not None and v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v


class AuthorCreate(AuthorBase):
    """
    Schema for creating a new author.

    Example request body:
    {
        "name": "Daniel Handler",
        "pseudonym": "Lemony Snicket",
        "nationality": "American",
        "birthDate": "1970-02-28"
    }
    """
    pass


class AuthorUpdate(AuthorBase):
    """Schema for replacing an existing author's fields."""
    pass


class BookOfAuthorResponse(CamelModel):
    """Short form of a book, listed on its author."""

    id: int
    title: str
    subtitle: str | None = None


class AuthorResponse(AuthorBase):
    """
    Schema returned after saving or updating an author.

    Usage:
        AuthorResponse.model_validate(author)
    """

    id: int = Field(
        ...,
        description="Unique identifier",
        examples=[1, 42],
    )


class AuthorDetailResponse(AuthorResponse):
    """Schema returned by the find endpoints: the author plus their books."""

    books: list[BookOfAuthorResponse] = Field(
        default=[],
        description="Books written by this author",
    )
