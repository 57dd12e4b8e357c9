"""
Pydantic Schemas Package

Request and response shapes for the API, kept separate from the SQLAlchemy
models so the wire format (camelCase JSON) can differ from the database.

Schema Naming Convention:
- XxxBase: Shared fields between create/update
- XxxCreate: Body of POST requests
- XxxUpdate: Body of PUT requests
- XxxResponse: Fields returned in API responses
"""

from library_api.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
)
from library_api.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)

__all__ = [
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
]
