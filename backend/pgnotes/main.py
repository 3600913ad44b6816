"""
pgnotes: FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, pool lifecycle, middleware registration,
       exception handlers and route mounting in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn imports `pgnotes.main:app`; the `pgnotes` console script
       calls run().

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────┐      │
    │  │  Req ID  │→│  Access Logging │→│  GZip    │      │
    │  └──────────┘ └─────────────────┘ └──────────┘      │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────────┐ ┌─────────────┐  │
    │  │ GET / , /edit/{id}            │ │ GET /health │  │
    │  │ POST /submit /update /toggle  │ └─────────────┘  │
    │  │      /delete                  │                  │
    │  └───────────────────────────────┘                  │
    │                                                     │
    │  Exception Handlers (plain text):                   │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the connection pool (Database) and store it on app.state
    3. Ensure the notes table exists (failure is logged, not fatal)

    Shutdown:
    1. Dispose the pool (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from pgnotes import __version__
from pgnotes.config import settings
from pgnotes.database import Database
from pgnotes.exceptions import NotFoundError, StorageError, ValidationError
from pgnotes.middleware.logging import RequestLoggingMiddleware
from pgnotes.middleware.request_id import RequestIDMiddleware, request_id_var
from pgnotes.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by Docker)
    Level:  settings.log_level
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing logging config
    )

    # RequestLoggingMiddleware replaces uvicorn's access log;
    # SQL echo is controlled by the engine, not by this logger's level
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the connection pool for the life of the process.

    A Database handed to create_app() (tests) is used as-is; otherwise one
    is built from settings. Either way the schema is ensured before the
    first request and the pool is disposed on shutdown.
    """
    setup_logging()
    logger.info("pgnotes %s starting up...", __version__)

    database: Optional[Database] = getattr(app.state, "database", None)
    if database is None:
        database = Database(settings)
        app.state.database = database

    # Not fatal: requests will surface StorageError until the store is back
    await database.create_schema()

    logger.info("App running on http://%s:%d", settings.app_host, settings.app_port)

    yield

    logger.info("pgnotes shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to plain-text responses.

    Handler hierarchy:
        ValidationError  → 400 Bad Request
        NotFoundError    → 404 Not Found
        StorageError     → 500 Internal Server Error (opaque message)
        Exception        → 500 Internal Server Error (unexpected errors)

    Tracebacks and driver messages are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message, status_code=404)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse("Internal Server Error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Pool handle to use instead of building one from settings
                  at startup (tests pass a SQLite-backed one).

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="pgnotes",
        description="Create, list, edit, complete and soft-delete short text notes.",
        version=__version__,
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → route
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `pgnotes.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on APP_HOST:APP_PORT."""
    uvicorn.run(
        "pgnotes.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
