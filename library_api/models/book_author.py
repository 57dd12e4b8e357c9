"""
BookAuthor Model

The association object linking a book to its author.

A full model class is used instead of a plain Table so both sides can
cascade deletes through the ORM: removing a book or an author removes the
join rows that point at it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author
    from library_api.models.book import Book


class BookAuthor(Base):
    """
    Join record pairing one book with one author.

    Table: book_authors

    The composite primary key makes each (book, author) pair unique.
    Both foreign keys cascade at the database level as well, so rows are
    cleaned up even when a parent is deleted outside the ORM.
    """

    __tablename__ = "book_authors"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    book: Mapped["Book"] = relationship(back_populates="book_authors")
    author: Mapped["Author"] = relationship(back_populates="book_authors")

    def __repr__(self) -> str:
        return f"BookAuthor(book_id={self.book_id}, author_id={self.author_id})"
