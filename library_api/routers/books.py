"""
Books Router

CRUD endpoints for books.

Every book is created with exactly one author, looked up by name. The
author link is fixed at creation: updates may change the title,
publication date and ISBN, but a request naming a different author is
refused.
"""

import logging

from fastapi import APIRouter, Request, Response, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from library_api.config import get_settings
from library_api.database import commit_or_reject
from library_api.dependencies import DbSession
from library_api.exceptions import BadRequestError, NotFoundError
from library_api.models import Author, Book, BookAuthor
from library_api.schemas import BookBase, BookCreate, BookResponse, BookUpdate
from library_api.services.rate_limiter import limiter
from library_api.utils.validators import (
    is_blank,
    is_default_date,
    is_future_date,
    is_valid_isbn,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)

ISBN_NOT_UNIQUE = "ISBN must be unique."


# =============================================================================
# Helper Functions
# =============================================================================
def get_book_or_404(db: DbSession, book_id: int) -> Book:
    """
    Get a book by ID or raise 404.

    Eagerly loads the author link so the response can be built without
    further queries.

    Raises:
        NotFoundError: if the book does not exist
    """
    stmt = (
        select(Book)
        .options(selectinload(Book.book_authors).selectinload(BookAuthor.author))
        .where(Book.id == book_id)
    )
    book = db.execute(stmt).scalar_one_or_none()

    if book is None:
        raise NotFoundError("Book not found.")

    return book


def validate_book_fields(book_data: BookBase, require_author_name: bool) -> None:
    """
    Run the field checks shared by create and update.

    Checks run in a fixed order and the first failure wins: missing keys,
    blank values, a future date, then the ISBN length.

    Raises:
        BadRequestError: with the message for the first failed check
    """
    if book_data.has_missing_fields():
        raise BadRequestError("Missing required book data.")

    blank_author = require_author_name and is_blank(book_data.author_name)
    if (
        is_blank(book_data.title)
        or is_blank(book_data.isbn)
        or blank_author
        or is_default_date(book_data.publication_date)
    ):
        raise BadRequestError("Invalid book data.")

    if is_future_date(book_data.publication_date):
        raise BadRequestError("Publication date cannot be in the future.")

    if not is_valid_isbn(book_data.isbn):
        raise BadRequestError("ISBN must be either 10 or 13 characters long.")


def isbn_taken(db: DbSession, isbn: str, exclude_id: int | None = None) -> bool:
    """Check whether another book already uses this ISBN."""
    stmt = select(Book.id).where(Book.isbn == isbn)
    if exclude_id is not None:
        stmt = stmt.where(Book.id != exclude_id)
    return db.execute(stmt).first() is not None


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book with its author's name.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(request: Request, db: DbSession) -> list[BookResponse]:
    """List all books."""
    stmt = (
        select(Book)
        .options(selectinload(Book.book_authors).selectinload(BookAuthor.author))
        .order_by(Book.id)
    )
    books = db.execute(stmt).scalars().all()
    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve a single book with its author's name.",
)
@limiter.limit(settings.rate_limit_default)
def get_book(request: Request, book_id: int, db: DbSession) -> BookResponse:
    """Get a single book by its ID."""
    book = get_book_or_404(db, book_id)
    return BookResponse.model_validate(book)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a book linked to an existing author, looked up by name.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    response: Response,
    book_data: BookCreate,
    db: DbSession,
) -> BookResponse:
    """
    Create a new book.

    The author must already exist; books cannot create authors. The book
    and its author link are written in the same transaction.

    Returns:
        The created book, with a Location header pointing at it

    Raises:
        BadRequestError: on any failed field check, a duplicate ISBN or
            an unknown author name
    """
    validate_book_fields(book_data, require_author_name=True)

    if isbn_taken(db, book_data.isbn):
        raise BadRequestError(ISBN_NOT_UNIQUE)

    author = db.execute(
        select(Author).where(Author.name == book_data.author_name)
    ).scalar_one_or_none()
    if author is None:
        raise BadRequestError("Author does not exist.")

    book = Book(
        title=book_data.title,
        publication_date=book_data.publication_date,
        isbn=book_data.isbn,
    )
    book.book_authors.append(BookAuthor(author=author))

    db.add(book)
    commit_or_reject(db, ISBN_NOT_UNIQUE)
    db.refresh(book)

    logger.info(f"Created book {book.id} (isbn={book.isbn}) by author {author.id}")

    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a book",
    description="Replace a book's title, publication date and ISBN. The author cannot change.",
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
) -> None:
    """
    Update an existing book.

    All four fields must be sent. authorName must equal the book's current
    author's name.

    Raises:
        NotFoundError: if the book does not exist
        BadRequestError: on any failed field check, an ISBN used by
            another book, or a different author name
    """
    book = get_book_or_404(db, book_id)

    validate_book_fields(book_data, require_author_name=False)

    if isbn_taken(db, book_data.isbn, exclude_id=book_id):
        raise BadRequestError(ISBN_NOT_UNIQUE)

    if book_data.author_name != book.author_name:
        raise BadRequestError("Author name cannot be modified.")

    book.title = book_data.title
    book.publication_date = book_data.publication_date
    book.isbn = book_data.isbn

    commit_or_reject(db, ISBN_NOT_UNIQUE)

    logger.info(f"Updated book {book_id}")


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Permanently delete a book and its author link.",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(request: Request, book_id: int, db: DbSession) -> None:
    """
    Delete a book.

    Raises:
        NotFoundError: if the book does not exist
    """
    book = get_book_or_404(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Deleted book {book_id}")
