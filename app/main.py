"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Controllers are constructed here, explicitly, and their route
     tables registered under /api/{version}

2. Lifespan Events
   - startup: log configuration, create missing tables
   - shutdown: dispose of the connection pool

3. Exception Handlers
   - Request validation errors become 400 envelopes with field errors
   - Database and unexpected errors become opaque 500 envelopes
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import get_settings
from app.database import create_tables, engine
from app.routers import AuthorController, BookController
from app.utils.responses import send_response
from app.utils.validation import field_errors, validation_failed

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API version: {settings.api_version}")

    if settings.create_tables_on_startup:
        create_tables()
        logger.info("Database tables ready")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    author_controller: AuthorController | None = None,
    book_controller: BookController | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        author_controller: Controller for /author routes (default wiring
            when None)
        book_controller: Controller for /book routes (default wiring
            when None)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library CRUD API

A RESTful API for managing authors and books.

### Features
- **Authors**: paginated listing, lookup, create, update, delete
- **Books**: the same operations; books reference their authors by id

### Responses
Every response uses the same envelope: `message` or `error`, optional
`data` list and optional pagination `metadata`.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle FastAPI's own validation errors.

        These come from query parameters (page, size, sort) and from
        bodies that aren't a JSON object at all.
        """
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return validation_failed(field_errors(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Unknown routes and wrong methods get the error envelope too."""
        return send_response(exc.status_code, str(exc.detail), error=True)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return send_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "A database error occurred.",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        Malformed path ids land here (parse_id raises ValueError).
        In debug mode the exception text is returned.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        text = str(exc) if settings.debug else "An internal error occurred."
        return send_response(status.HTTP_500_INTERNAL_SERVER_ERROR, text)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = f"/api/{settings.api_version}"

    author_controller = author_controller or AuthorController()
    book_controller = book_controller or BookController()
    app.include_router(author_controller.router(), prefix=api_prefix)
    app.include_router(book_controller.router(), prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """Health check for load balancers and container probes."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
            "authors": f"{api_prefix}/author/findAll",
            "books": f"{api_prefix}/book/findAll",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m app.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
