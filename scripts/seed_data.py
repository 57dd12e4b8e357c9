#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books for development.

USAGE:
    # From the project root with the virtualenv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data
3. Creates sample authors, then one book per entry linked to its author
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Author, Book, BookAuthor

AUTHOR_NAMES = [
    "George Orwell",
    "Jane Austen",
    "Ernest Hemingway",
    "Agatha Christie",
    "Isaac Asimov",
    "J.R.R. Tolkien",
]

BOOKS_DATA = [
    {
        "title": "1984",
        "isbn": "9780451524935",
        "publication_date": date(1949, 6, 8),
        "author": "George Orwell",
    },
    {
        "title": "Animal Farm",
        "isbn": "9780451526342",
        "publication_date": date(1945, 8, 17),
        "author": "George Orwell",
    },
    {
        "title": "Pride and Prejudice",
        "isbn": "9780141439518",
        "publication_date": date(1813, 1, 28),
        "author": "Jane Austen",
    },
    {
        "title": "The Old Man and the Sea",
        "isbn": "0684801221",
        "publication_date": date(1952, 9, 1),
        "author": "Ernest Hemingway",
    },
    {
        "title": "Murder on the Orient Express",
        "isbn": "9780062693662",
        "publication_date": date(1934, 1, 1),
        "author": "Agatha Christie",
    },
    {
        "title": "Foundation",
        "isbn": "9780553293357",
        "publication_date": date(1951, 5, 1),
        "author": "Isaac Asimov",
    },
    {
        "title": "I, Robot",
        "isbn": "0553382569",
        "publication_date": date(1950, 12, 2),
        "author": "Isaac Asimov",
    },
    {
        "title": "The Hobbit",
        "isbn": "9780547928227",
        "publication_date": date(1937, 9, 21),
        "author": "J.R.R. Tolkien",
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookAuthor))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors."""
    print("Creating authors...")
    authors = {name: Author(name=name) for name in AUTHOR_NAMES}
    db.add_all(authors.values())
    db.commit()

    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books, each linked to one author."""
    print("Creating books...")

    books = []
    for data in BOOKS_DATA:
        data = dict(data)
        author = authors[data.pop("author")]

        book = Book(**data)
        book.book_authors.append(BookAuthor(author=author))

        db.add(book)
        books.append(book)

    db.commit()

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
