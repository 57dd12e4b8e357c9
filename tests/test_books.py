"""
Tests for Books API Endpoints

This module tests all CRUD operations for the /books endpoints.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_success, test_get_book_not_found
"""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from sqlalchemy import func, select

from library_api.models import Book, BookAuthor
from library_api.routers import books as books_router


class TestListBooks:
    """Tests for GET /books endpoint."""

    def test_list_books_empty(self, client):
        """Test listing books when database is empty."""
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_books_with_data(self, client, sample_book):
        """Test listing books returns the camelCase projection."""
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [
            {
                "id": sample_book.id,
                "title": "1984",
                "publicationDate": "1949-06-08",
                "isbn": "9780451524935",
                "authorName": "George Orwell",
            }
        ]

    def test_list_books_ordered_by_id(self, client, sample_book, second_book):
        """Test books are listed in creation order."""
        response = client.get("/books")

        titles = [book["title"] for book in response.json()]
        assert titles == ["1984", "Animal Farm"]


class TestGetBook:
    """Tests for GET /books/{book_id} endpoint."""

    def test_get_book_success(self, client, sample_book):
        """Test getting a book by ID."""
        response = client.get(f"/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "1984"
        assert data["isbn"] == "9780451524935"
        assert data["authorName"] == "George Orwell"

    def test_get_book_not_found(self, client):
        """Test getting a non-existent book returns 404 with a message."""
        response = client.get("/books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.text == "Book not found."

    def test_get_book_invalid_id(self, client):
        """Test a non-integer ID is rejected as a bad path, not a bad body."""
        response = client.get("/books/abc")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Malformed request path."


class TestCreateBook:
    """Tests for POST /books endpoint."""

    def test_create_book_success(self, client, sample_author, book_payload):
        """Test creating a book linked to an existing author."""
        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["title"] == "Homage to Catalonia"
        assert data["publicationDate"] == "1938-04-25"
        assert data["isbn"] == "9780156421171"
        assert data["authorName"] == "George Orwell"
        assert response.headers["location"].endswith(f"/books/{data['id']}")

    def test_create_book_links_author(self, client, sample_author, book_payload):
        """Test the new book shows up under its author."""
        client.post("/books", json=book_payload)

        response = client.get(f"/authors/{sample_author.id}")
        assert response.json()["books"] == ["Homage to Catalonia"]

    def test_create_book_isbn_10(self, client, sample_author, book_payload):
        """Test a 10-character ISBN is accepted."""
        book_payload["isbn"] = "0156421178"

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED

    def test_create_book_snake_case_keys(self, client, sample_author):
        """Test snake_case keys are accepted as well as camelCase."""
        response = client.post(
            "/books",
            json={
                "title": "Burmese Days",
                "publication_date": "1934-10-25",
                "isbn": "9780156148504",
                "author_name": "George Orwell",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED

    @pytest.mark.parametrize("isbn", ["045152493", "04515249351", "978045152493"])
    def test_create_book_invalid_isbn_length(self, client, sample_author, book_payload, isbn):
        """Test ISBNs that are not 10 or 13 characters are rejected."""
        book_payload["isbn"] = isbn

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "ISBN must be either 10 or 13 characters long."

    def test_create_book_duplicate_isbn(self, client, sample_book, book_payload):
        """Test the second book with the same ISBN is rejected."""
        book_payload["isbn"] = sample_book.isbn

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "ISBN must be unique."

    def test_create_book_unknown_author(self, client, sample_author, book_payload):
        """Test a book naming an author that does not exist is rejected."""
        book_payload["authorName"] = "Aldous Huxley"

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Author does not exist."

    def test_create_book_unknown_author_not_persisted(
        self, client, db_session, sample_author, book_payload
    ):
        """Test nothing is written when the author lookup fails."""
        book_payload["authorName"] = "Aldous Huxley"

        client.post("/books", json=book_payload)

        assert db_session.scalar(select(func.count()).select_from(Book)) == 0

    @pytest.mark.parametrize(
        "missing", ["title", "publicationDate", "isbn", "authorName"]
    )
    def test_create_book_missing_field(self, client, sample_author, book_payload, missing):
        """Test each of the four fields is required."""
        del book_payload[missing]

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Missing required book data."

    @pytest.mark.parametrize(
        "field, value",
        [
            ("title", "   "),
            ("title", None),
            ("isbn", ""),
            ("authorName", " "),
            ("publicationDate", None),
            ("publicationDate", "0001-01-01"),
        ],
    )
    def test_create_book_invalid_data(self, client, sample_author, book_payload, field, value):
        """Test blank strings and placeholder dates are rejected."""
        book_payload[field] = value

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Invalid book data."

    def test_create_book_future_date(self, client, sample_author, book_payload):
        """Test a publication date after today is rejected."""
        future = datetime.now(UTC).date() + timedelta(days=30)
        book_payload["publicationDate"] = future.isoformat()

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Publication date cannot be in the future."

    def test_create_book_today(self, client, sample_author, book_payload):
        """Test a book published today is accepted."""
        book_payload["publicationDate"] = datetime.now(UTC).date().isoformat()

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED

    def test_create_book_malformed_json(self, client, sample_author):
        """Test a body that is not JSON is rejected before any lookup."""
        response = client.post(
            "/books",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Malformed request body."

    def test_create_book_unparsable_date(self, client, sample_author, book_payload):
        """Test a date that is not ISO formatted is rejected."""
        book_payload["publicationDate"] = "next tuesday"

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Malformed request body."


class TestUpdateBook:
    """Tests for PUT /books/{book_id} endpoint."""

    @pytest.fixture
    def update_payload(self) -> dict:
        return {
            "title": "Nineteen Eighty-Four",
            "publicationDate": "1949-06-09",
            "isbn": "0451524934",
            "authorName": "George Orwell",
        }

    def test_update_book_success(self, client, sample_book, update_payload):
        """Test changing title, date and ISBN keeps the author."""
        book_id = sample_book.id

        response = client.put(f"/books/{book_id}", json=update_payload)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""

        data = client.get(f"/books/{book_id}").json()
        assert data["title"] == "Nineteen Eighty-Four"
        assert data["publicationDate"] == "1949-06-09"
        assert data["isbn"] == "0451524934"
        assert data["authorName"] == "George Orwell"

    def test_update_book_keep_own_isbn(self, client, sample_book, update_payload):
        """Test a book may keep its own ISBN."""
        update_payload["isbn"] = sample_book.isbn

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_update_book_change_author(self, client, sample_book, second_author, update_payload):
        """Test the author of a book cannot be changed."""
        update_payload["authorName"] = "Jane Austen"

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Author name cannot be modified."

    def test_update_book_change_author_leaves_book(
        self, client, sample_book, second_author, update_payload
    ):
        """Test a refused update changes nothing."""
        book_id = sample_book.id
        update_payload["authorName"] = "Jane Austen"

        client.put(f"/books/{book_id}", json=update_payload)

        data = client.get(f"/books/{book_id}").json()
        assert data["title"] == "1984"
        assert data["authorName"] == "George Orwell"

    def test_update_book_isbn_taken(self, client, sample_book, second_book, update_payload):
        """Test an ISBN used by another book is rejected."""
        update_payload["isbn"] = second_book.isbn

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "ISBN must be unique."

    def test_update_book_invalid_isbn(self, client, sample_book, update_payload):
        """Test the ISBN length check applies to updates."""
        update_payload["isbn"] = "12345"

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "ISBN must be either 10 or 13 characters long."

    def test_update_book_future_date(self, client, sample_book, update_payload):
        """Test the future date check applies to updates."""
        future = datetime.now(UTC).date() + timedelta(days=365)
        update_payload["publicationDate"] = future.isoformat()

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Publication date cannot be in the future."

    def test_update_book_missing_field(self, client, sample_book, update_payload):
        """Test all four fields are required on update."""
        del update_payload["authorName"]

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Missing required book data."

    def test_update_book_blank_title(self, client, sample_book, update_payload):
        """Test a blank title is rejected on update."""
        update_payload["title"] = ""

        response = client.put(f"/books/{sample_book.id}", json=update_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Invalid book data."

    def test_update_book_not_found(self, client, update_payload):
        """Test updating a non-existent book returns 404."""
        response = client.put("/books/99999", json=update_payload)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.text == "Book not found."


class TestDeleteBook:
    """Tests for DELETE /books/{book_id} endpoint."""

    def test_delete_book_success(self, client, sample_book):
        """Test deleting a book successfully."""
        book_id = sample_book.id

        response = client.delete(f"/books/{book_id}")

        assert response.status_code == status.HTTP_204_NO_CONTENT

        get_response = client.get(f"/books/{book_id}")
        assert get_response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_removes_link(self, client, db_session, sample_book, sample_author):
        """Test the join row goes with the book but the author stays."""
        author_id = sample_author.id

        client.delete(f"/books/{sample_book.id}")

        assert db_session.scalar(select(func.count()).select_from(BookAuthor)) == 0
        response = client.get(f"/authors/{author_id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["books"] == []

    def test_delete_book_not_found(self, client):
        """Test deleting a non-existent book returns 404."""
        response = client.delete("/books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.text == "Book not found."


class TestIsbnRace:
    """
    Two requests can both pass the ISBN check before either commits.
    The unique index then rejects the second write.
    """

    @pytest.fixture(autouse=True)
    def skip_isbn_check(self, monkeypatch):
        monkeypatch.setattr(books_router, "isbn_taken", lambda *args, **kwargs: False)

    def test_create_book_duplicate_isbn_on_commit(self, client, sample_book, book_payload):
        """Test the unique index answers with the same message as the check."""
        book_payload["isbn"] = "9780451524935"

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "ISBN must be unique."

        books = client.get("/books")
        assert books.status_code == status.HTTP_200_OK
        assert [book["title"] for book in books.json()] == ["1984"]

    def test_update_book_duplicate_isbn_on_commit(self, client, sample_book, second_book):
        """Test a rolled back update leaves the book as it was."""
        book_id = sample_book.id

        response = client.put(
            f"/books/{book_id}",
            json={
                "title": "Nineteen Eighty-Four",
                "publicationDate": "1949-06-08",
                "isbn": "0451526341",
                "authorName": "George Orwell",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "ISBN must be unique."

        data = client.get(f"/books/{book_id}").json()
        assert data["title"] == "1984"
        assert data["isbn"] == "9780451524935"


class TestLongValues:
    """Titles have no length limit."""

    def test_create_book_long_title(self, client, sample_author, book_payload):
        book_payload["title"] = "A" * 2000

        response = client.post("/books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.json()["title"]) == 2000
