"""
Q&A Service — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, middleware registration, route mounting,
       storage wiring and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       holding its own Database on app.state.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:   Request context (ID + access log)     │
    │                                                      │
    │  Routes:       /questions   /answers   /health       │
    │                                                      │
    │  Exception Handlers (plain-text bodies):             │
    │    bad JSON / bad id → 400   NotFound → 404          │
    │    QuestionNotFound  → 400   Database → 500          │
│    unknown path → 404        wrong method → 405      │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, connect and create schema (fatal on failure)
    Shutdown: dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import Database
from app.exceptions import (
    DatabaseError,
    NotFoundError,
    QAServiceError,
    QuestionNotFoundError,
)
from app.middleware.request_context import RequestContextMiddleware, RequestIdLogFilter
from app.routes import answers, health, questions

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    Output: stdout (captured by the container runtime)
    When:   Called once during app startup.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party loggers that repeat what the access log already says
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Connect to the database and create the schema; the service cannot
           run without its store, so any failure here exits the process
    Shutdown:
        1. Dispose the engine (close pooled connections)
    """
    setup_logging()
    logger.info("Q&A Service %s starting up...", __version__)

    database: Database = app.state.database
    try:
        await database.connect()
    except Exception as e:
        logger.critical("Database setup failed: %s", str(e), exc_info=True)
        raise SystemExit(1)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Q&A Service shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and short plain-text bodies.

    Handler hierarchy:
        RequestValidationError  → 400 ("bad id" for path params, else "bad request")
        QuestionNotFoundError   → 400
        NotFoundError           → 404
        DatabaseError           → 500 (context logged, never returned)
        QAServiceError (base)   → 500
        HTTPException           → its own status (404 unknown path, 405 method)
        Exception (fallback)    → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed JSON, wrong JSON types, or a path id that is not a 64-bit integer."""
        bad_path = any(err.get("loc", ("",))[0] == "path" for err in exc.errors())
        message = "bad id" if bad_path else "bad request"
        logger.warning("Rejected request %s %s: %s", request.method, request.url.path, message)
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Routing errors from Starlette, kept plain-text like every other body."""
        return PlainTextResponse(
            str(exc.detail).lower(),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(QuestionNotFoundError)
    async def handle_question_not_found(request: Request, exc: QuestionNotFoundError):
        """Answer posted under a question that does not exist."""
        return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message, status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; details logged server-side."""
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse("internal", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(QAServiceError)
    async def handle_service_error(request: Request, exc: QAServiceError):
        logger.error("Unhandled service error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse("internal", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace goes to the log only."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return PlainTextResponse("internal", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Storage client to serve requests from. Defaults to one
                  built from settings (DATABASE_URL). Tests pass their own.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Q&A Service API",
        description="Create questions, answer them, and list, fetch or delete both.",
        version=__version__,
        lifespan=lifespan,
    )

    # Engine creation does not connect; the lifespan handler does
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(questions.router)
    app.include_router(answers.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
