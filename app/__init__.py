"""
Library CRUD API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: Controllers and their route tables
- services/: Business logic returning Ok/Err results
- utils/: Response envelope and validation helpers
"""

__version__ = "0.1.0"
