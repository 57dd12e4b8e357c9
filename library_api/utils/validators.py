"""
Field Validators

Plain checks shared by the book and author routers. They only answer
yes/no; the routers decide which message to send back.
"""

from datetime import UTC, date, datetime

VALID_ISBN_LENGTHS = (10, 13)


def is_blank(value: str | None) -> bool:
    """True for None, the empty string, or whitespace only."""
    return value is None or not value.strip()


def is_valid_isbn(isbn: str) -> bool:
    """
    Check the ISBN length.

    Only the length is checked: ISBN-10 and ISBN-13 are 10 and 13
    characters long. Check digits and hyphenation are not validated.
    """
    return len(isbn) in VALID_ISBN_LENGTHS


def is_default_date(value: date | None) -> bool:
    """True for a missing date or the minimum date clients send as a placeholder."""
    return value is None or value == date.min


def is_future_date(value: date, today: date | None = None) -> bool:
    """True if value is after today, in UTC."""
    if today is None:
        today = datetime.now(UTC).date()
    return value > today
