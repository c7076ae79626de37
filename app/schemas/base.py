"""
Shared Pydantic base for API schemas.

The wire format uses camelCase names (birthDate, totalPages, isbn13)
while Python code keeps snake_case attributes. The alias generator does
the translation in both directions:

    AuthorResponse.model_validate(author)             # reads author.birth_date
    response.model_dump(by_alias=True)                 # {"birthDate": ...}
    AuthorCreate.model_validate({"birthDate": ...})    # camelCase accepted
    AuthorCreate.model_validate({"birth_date": ...})   # so is snake_case
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases, usable from ORM attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
