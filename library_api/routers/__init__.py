"""
API Routers Package

Router Structure:
- books.py: /books/* endpoints
- authors.py: /authors/* endpoints

Each router is imported and registered in main.py.
"""

from library_api.routers.authors import router as authors_router
from library_api.routers.books import router as books_router

__all__ = [
    "books_router",
    "authors_router",
]
