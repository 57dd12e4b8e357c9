"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AuthorBase(BaseModel):
    """
    Shared body of author create and update requests.

    name is optional here so a missing key reaches the router, which
    answers it with its own message.
    """

    name: str | None = Field(
        default=None,
        description="Author's full name",
        examples=["George Orwell", "Jane Austen"],
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def has_name(self) -> bool:
        """True if the name key was present in the request body."""
        return "name" in self.model_fields_set


class AuthorCreate(AuthorBase):
    """Schema for creating a new author."""
    pass


class AuthorUpdate(AuthorBase):
    """Schema for renaming an existing author."""
    pass


class AuthorResponse(BaseModel):
    """
    Schema for author responses.

    books lists the titles of the author's books. When validated from an
    Author model, the Author.books relationship is reduced to titles.
    """

    id: int = Field(..., description="Unique identifier", examples=[1, 42])
    name: str = Field(..., description="Author's full name")
    books: list[str] = Field(
        default=[],
        description="Titles of the author's books",
    )

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "George Orwell",
                "books": ["1984", "Animal Farm"],
            }
        },
    )

    @field_validator("books", mode="before")
    @classmethod
    def book_titles(cls, v: Any) -> Any:
        """Accept Book instances as well as plain titles."""
        if v is None:
            return []
        return [book if isinstance(book, str) else book.title for book in v]
