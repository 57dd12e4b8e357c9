"""
Book Pydantic Schemas

Request bodies only parse types here. Every field is optional at the
Pydantic level so the routers can tell an absent key from a blank value
and answer each case with its own message.
"""

from datetime import date
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookBase(BaseModel):
    """
    Shared body of book create and update requests.

    JSON keys are camelCase (publicationDate, authorName); snake_case keys
    are accepted too.
    """

    REQUIRED_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"title", "publication_date", "isbn", "author_name"}
    )

    title: str | None = Field(
        default=None,
        description="Book title",
        examples=["1984"],
    )

    publication_date: date | None = Field(
        default=None,
        description="Date of publication, not in the future",
        examples=["1949-06-08"],
    )

    isbn: str | None = Field(
        default=None,
        description="ISBN, exactly 10 or 13 characters",
        examples=["9780451524935", "0451524934"],
    )

    author_name: str | None = Field(
        default=None,
        description="Name of an existing author",
        examples=["George Orwell"],
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def has_missing_fields(self) -> bool:
        """True if any required key was absent from the request body."""
        return not self.REQUIRED_FIELDS <= self.model_fields_set


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "publicationDate": "1949-06-08",
        "isbn": "9780451524935",
        "authorName": "George Orwell"
    }
    """
    pass


class BookUpdate(BookBase):
    """
    Schema for updating an existing book.

    Same shape as BookCreate. authorName must match the book's current
    author; it is there so clients send the full representation back.
    """
    pass


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Built from Book model instances; author_name comes from the model's
    property of the same name.
    """

    id: int = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    publication_date: date = Field(..., description="Date of publication")
    isbn: str = Field(..., description="ISBN-10 or ISBN-13")
    author_name: str | None = Field(
        default=None,
        description="Name of the book's author",
    )

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "1984",
                "publicationDate": "1949-06-08",
                "isbn": "9780451524935",
                "authorName": "George Orwell",
            }
        },
    )
