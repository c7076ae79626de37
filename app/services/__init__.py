"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Constructed with the database session they work on
- Free of HTTP concerns: they return Ok/Err results, never status codes

Current services:
- authors.py: Author CRUD and name/pseudonym uniqueness
- books.py: Book CRUD, ISBN-13 uniqueness and author resolution
- pagination.py: Paged, sorted queries and their metadata
- result.py: Ok/Err result types and error kinds
"""
