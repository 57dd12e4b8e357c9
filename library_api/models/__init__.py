"""
SQLAlchemy Models Package

Model Relationships:
- Author <-> Book: Many-to-Many through the BookAuthor association object.
  In practice each book is created with exactly one author, and that link
  never changes afterwards.

Importing the models here makes them available as
`from library_api.models import Author, Book, BookAuthor` and registers
every table with Base.metadata for Alembic.
"""

from library_api.models.author import Author
from library_api.models.book import Book
from library_api.models.book_author import BookAuthor

__all__ = [
    "Author",
    "Book",
    "BookAuthor",
]
