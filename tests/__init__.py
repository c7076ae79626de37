"""
Test Suite for the Library API

Test Organization:
- conftest.py: Shared fixtures (test database, clients, sample data)
- test_authors.py: Tests for /api/v1/author endpoints
- test_books.py: Tests for /api/v1/book endpoints
- test_services.py: Service layer and pagination helpers, without HTTP
- test_responses.py: Response envelope and validation helpers

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run specific test class
    pytest tests/test_books.py::TestSaveBook -v
"""
