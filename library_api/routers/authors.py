"""
Authors Router

CRUD endpoints for authors.
Follows the same patterns as the books router.
"""

import logging

from fastapi import APIRouter, Request, Response, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from library_api.config import get_settings
from library_api.database import commit_or_reject
from library_api.dependencies import DbSession
from library_api.exceptions import BadRequestError, NotFoundError
from library_api.models import Author, BookAuthor
from library_api.schemas import AuthorBase, AuthorCreate, AuthorResponse, AuthorUpdate
from library_api.services.rate_limiter import limiter
from library_api.utils.validators import is_blank

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        404: {"description": "Author not found"},
    },
)


def get_author_or_404(db: DbSession, author_id: int) -> Author:
    """Get an author by ID, with their books, or raise 404."""
    stmt = (
        select(Author)
        .options(selectinload(Author.books))
        .where(Author.id == author_id)
    )
    author = db.execute(stmt).scalar_one_or_none()

    if author is None:
        raise NotFoundError("Author not found.")
    return author


def validate_author_name(author_data: AuthorBase) -> None:
    """Reject a missing or blank name."""
    if not author_data.has_name():
        raise BadRequestError("Missing author name.")

    if is_blank(author_data.name):
        raise BadRequestError("Author name cannot be null or empty.")


def name_taken(db: DbSession, name: str, exclude_id: int | None = None) -> bool:
    """Check whether another author already uses this name."""
    stmt = select(Author.id).where(Author.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Author.id != exclude_id)
    return db.execute(stmt).first() is not None


@router.get(
    "",
    response_model=list[AuthorResponse],
    summary="List all authors",
    description="Get every author with the titles of their books.",
)
@limiter.limit(settings.rate_limit_default)
def list_authors(request: Request, db: DbSession) -> list[AuthorResponse]:
    """List all authors."""
    stmt = select(Author).options(selectinload(Author.books)).order_by(Author.id)
    authors = db.execute(stmt).scalars().all()
    return [AuthorResponse.model_validate(a) for a in authors]


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Get an author by ID",
    description="Retrieve a single author with the titles of their books.",
)
@limiter.limit(settings.rate_limit_default)
def get_author(request: Request, author_id: int, db: DbSession) -> AuthorResponse:
    """Get a single author by ID."""
    author = get_author_or_404(db, author_id)
    return AuthorResponse.model_validate(author)


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    description="Create a new author. Names must be unique.",
)
@limiter.limit(settings.rate_limit_write)
def create_author(
    request: Request,
    response: Response,
    author_data: AuthorCreate,
    db: DbSession,
) -> AuthorResponse:
    """Create a new author."""
    validate_author_name(author_data)

    message = "Author name already exists."
    if name_taken(db, author_data.name):
        raise BadRequestError(message)

    author = Author(name=author_data.name)
    db.add(author)
    commit_or_reject(db, message)
    db.refresh(author)

    logger.info(f"Created author {author.id} ({author.name})")

    response.headers["Location"] = str(
        request.url_for("get_author", author_id=author.id)
    )
    return AuthorResponse.model_validate(author)


@router.put(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update an author",
    description="Rename an existing author.",
)
@limiter.limit(settings.rate_limit_write)
def update_author(
    request: Request,
    author_id: int,
    author_data: AuthorUpdate,
    db: DbSession,
) -> None:
    """Rename an existing author. Their books follow the new name."""
    author = get_author_or_404(db, author_id)

    validate_author_name(author_data)

    message = "An author with the same name already exists."
    if name_taken(db, author_data.name, exclude_id=author_id):
        raise BadRequestError(message)

    author.name = author_data.name
    commit_or_reject(db, message)

    logger.info(f"Renamed author {author_id} to {author_data.name}")


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    description="Permanently delete an author together with all of their books.",
)
@limiter.limit(settings.rate_limit_write)
def delete_author(request: Request, author_id: int, db: DbSession) -> None:
    """
    Delete an author and everything written by them.

    The author's books go first; deleting each book removes its link
    rows, and deleting the author removes any that remain.
    """
    stmt = (
        select(Author)
        .options(selectinload(Author.book_authors).selectinload(BookAuthor.book))
        .where(Author.id == author_id)
    )
    author = db.execute(stmt).scalar_one_or_none()
    if author is None:
        raise NotFoundError("Author not found.")

    books = [link.book for link in author.book_authors]
    for book in books:
        db.delete(book)
    db.delete(author)
    db.commit()

    logger.info(f"Deleted author {author_id} and {len(books)} book(s)")
