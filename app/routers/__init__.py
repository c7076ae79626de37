"""
API Routers Package

This package contains the controllers that handle API endpoints.

Router Structure:
- base.py: Route tables, route registration, service error translation
- authors.py: /api/v1/author/* endpoints
- books.py: /api/v1/book/* endpoints

Each controller is instantiated and its router registered in main.py.
"""

from app.routers.authors import AuthorController
from app.routers.books import BookController

__all__ = [
    "AuthorController",
    "BookController",
]
