"""
Application Exceptions

Routers raise these instead of building responses by hand. The handler
registered in main.create_app() turns them into plain-text responses
carrying the message and status code.
"""

from fastapi import status


class LibraryError(Exception):
    """Base class for errors reported back to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(LibraryError):
    """The request failed validation or would break a uniqueness rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(LibraryError):
    """The requested book or author does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
