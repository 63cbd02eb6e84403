"""
FastAPI Application Entry Point

Builds the Favlib API: a shared list of favourite books where signed-in
users add covers and reviews.

Key Concepts:
=============

1. Application Factory
   - create_app() returns a configured app (tests build their own)

2. Lifespan Events
   - startup: verify the database answers; the process aborts if not
   - shutdown: dispose of pooled connections

3. Middleware Stack
   - CORS: exactly one allowed origin (CLIENT_URL), credentials on

4. Exception Handlers
   - Every failure reaches the client as {"message": "..."}
   - Stack traces are logged, never returned
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from favlib import __version__
from favlib.config import get_settings
from favlib.database import check_connection, engine
from favlib.exceptions import InternalError, LibraryError
from favlib.routers import auth_router, books_router
from favlib.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
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

    A database that cannot be reached at startup is the one failure
    allowed to stop the process.
    """
    logger.info(f"Starting {settings.app_name} ({settings.environment})...")

    try:
        check_connection()
    except SQLAlchemyError:
        logger.critical("Database unreachable at startup, aborting", exc_info=True)
        raise
    logger.info("Database connection verified")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def validation_message(exc: RequestValidationError) -> str:
    """Flatten the first schema error into one readable sentence."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Favlib

Share your favourite books: sign up, add a book with its cover and
your review, and browse everything other readers have added.

### Authentication
Signup and login set an HTTP-only `token` cookie valid for 7 days.
        """,
        version=__version__,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    # A single origin: credentialed requests cannot use a wildcard.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError) -> JSONResponse:
        """Render domain errors raised by the services."""
        user_id = getattr(request.state, "user_id", None)
        logger.debug(
            f"{type(exc).__name__} on {request.url.path} (user {user_id}): {exc.message}"
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed JSON or wrongly typed fields."""
        return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc))

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
        error = InternalError("A database error occurred. Please try again later.")
        return error_response(error.status_code, error.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all: details only in debug mode."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        error = InternalError(str(exc) if settings.debug else None)
        return error_response(error.status_code, error.message)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(auth_router, prefix="/api")
    app.include_router(books_router, prefix="/api")

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
    )
    def health_check() -> dict:
        """Report whether the API and its database are up."""
        try:
            check_connection()
            database = "ok"
        except SQLAlchemyError as e:
            logger.warning(f"Health check: database unavailable ({e})")
            database = "unavailable"

        return {
            "status": "healthy" if database == "ok" else "degraded",
            "app": settings.app_name,
            "version": __version__,
            "database": database,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
    )
    def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn favlib.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "favlib.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
