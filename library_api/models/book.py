"""
Book Model

The central model of the Library API, representing books in the database.
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author
    from library_api.models.book_author import BookAuthor


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - publication_date: When the book was published (required)
    - isbn: International Standard Book Number, 10 or 13 characters (unique)

    Relationships:
    - book_authors: join rows owned by this book (deleted with it)

    Example:
        book = Book(
            title="1984",
            publication_date=date(1949, 6, 8),
            isbn="9780451524935",
        )
        book.book_authors.append(BookAuthor(author=orwell))
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Book title"
    )

    # Date (not DateTime) because we only care about the day, not time
    publication_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date of publication"
    )

    isbn: Mapped[str] = mapped_column(
        String(13),
        unique=True,
        index=True,
        nullable=False,
        comment="International Standard Book Number"
    )

    book_authors: Mapped[list["BookAuthor"]] = relationship(
        back_populates="book",
        cascade="all, delete-orphan",
    )

    @property
    def author(self) -> "Author | None":
        """The author the book was created with, if the link still exists."""
        if not self.book_authors:
            return None
        return self.book_authors[0].author

    @property
    def author_name(self) -> str | None:
        author = self.author
        return author.name if author is not None else None

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
