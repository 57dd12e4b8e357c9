"""
Author Model

Represents an author in the library database.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.book import Book
    from library_api.models.book_author import BookAuthor


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - book_authors: join rows owned by this author (deleted with it)
    - books: read-only view of the linked books, through book_authors

    Indexes:
    - name: Unique, author names identify authors in book requests

    Example:
        author = Author(name="George Orwell")
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Books reference their author by name, so names must be unique
    name: Mapped[str] = mapped_column(
        String,
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name"
    )

    book_authors: Mapped[list["BookAuthor"]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
    )

    # viewonly: writes go through book_authors
    books: Mapped[list["Book"]] = relationship(
        "Book",
        secondary="book_authors",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
