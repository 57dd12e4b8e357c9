"""
Test Suite for Library API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: Tests for /books endpoints
- test_authors.py: Tests for /authors endpoints
- test_validators.py: Tests for the field validators
- test_app.py: Health endpoints, error format and settings

Running Tests:
    pytest
    pytest --cov=library_api --cov-report=html
"""
