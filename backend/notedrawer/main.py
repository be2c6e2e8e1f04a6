"""
NoteDrawer Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with settings, token service, password hasher and (optionally) a
       database handle attached to `app.state`.
Who:   uvicorn (`uvicorn notedrawer.main:app`), the `notedrawer` console
       script, and the test suite (which passes its own settings/database).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware:  Request ID → Logging → CORS           │
    │  Routes:      /api/register  /api/login             │
    │               /api/drawers   /api/drawers/login     │
    │               /api/notes[/{id}]  (bearer token)     │
    │               /health                               │
    │  Errors:      400 validation/duplicate/credentials  │
    │               401 token  403 owner  404 note  500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration; missing DATABASE_URL / JWT_SECRET is fatal
    3. Connect to the store; an unreachable store is fatal
    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notedrawer import __version__
from notedrawer.config import Settings, get_settings
from notedrawer.database import Database
from notedrawer.exceptions import (
    DatabaseError,
    NoteDrawerError,
    UnauthenticatedError,
    ValidationError,
)
from notedrawer.middleware.logging import RequestLoggingMiddleware
from notedrawer.middleware.request_id import RequestIDMiddleware, request_id_var
from notedrawer.routes import auth, drawers, health, notes
from notedrawer.services.password_hasher import PasswordHasher
from notedrawer.services.token_service import TokenService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: validate settings and connect to the store, failing the whole
    process on any error. Shutdown: dispose the engine.

    A database handle supplied to create_app() is used as-is.
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("NoteDrawer Backend starting up...")

    if app.state.database is None:
        try:
            settings.validate_required()
        except ValueError as e:
            logger.error("Configuration error: %s", str(e))
            raise

        database = Database.from_settings(settings)
        try:
            await database.check_connection()
        except Exception as e:
            logger.error("Could not connect to the database: %s", str(e))
            await database.dispose()
            raise
        app.state.database = database

    logger.info("Server ready on %s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NoteDrawer Backend shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# pydantic error types reported to the client as "<field> required"
REQUIRED_ERROR_TYPES = {"missing", "string_too_short"}


def _request_id(request: Request) -> str:
    """
    The ID assigned by RequestIDMiddleware.

    Read from request state rather than the ContextVar: the catch-all
    handler runs in ServerErrorMiddleware, outside the middleware that
    sets the ContextVar.
    """
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str,
    headers: Optional[dict] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "code": code,
            "request_id": _request_id(request),
        },
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """
    Missing or empty fields → "email and password required".
    Any other problem → "<field>: <pydantic message>" for the first one.
    """
    required = []
    invalid = None
    for error in exc.errors():
        # loc looks like ("body", "email"); a missing body is just ("body",)
        loc = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
        field = loc[-1] if loc else None
        if error.get("type") in REQUIRED_ERROR_TYPES:
            if field and field not in required:
                required.append(field)
        elif invalid is None:
            msg = error.get("msg", "Invalid value")
            invalid = f"{field}: {msg}" if field else "Invalid request body"
    if invalid:
        return invalid
    if not required:
        return "Invalid request body"
    return f"{' and '.join(required)} required"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to JSON error responses.

    Handler hierarchy:
        RequestValidationError  → 400 (FastAPI's 422 remapped)
        UnauthenticatedError    → 401 + WWW-Authenticate: Bearer
        DatabaseError           → 500, generic message, context logged
        NoteDrawerError (base)  → exc.status_code
        Exception (fallback)    → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(_describe_validation_error(exc))
        logger.warning("[%s] Validation error: %s", _request_id(request), error.message)
        return _error_response(request, error.status_code, error.message, error.code)

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError):
        return _error_response(
            request,
            exc.status_code,
            exc.message,
            exc.code,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            _request_id(request),
            exc.message,
            exc.context,
        )
        return _error_response(request, 500, exc.message, exc.code)

    @app.exception_handler(NoteDrawerError)
    async def handle_app_error(request: Request, exc: NoteDrawerError):
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", _request_id(request), exc.message, exc.context)
        return _error_response(request, exc.status_code, exc.message, exc.code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return _error_response(request, 500, "server error", "internal_server_error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: configuration; read from the environment when omitted
        database: ready database handle; when omitted one is built from
            settings during startup

    Returns: Fully configured FastAPI instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="NoteDrawer API",
        description=(
            "Short text notes owned by a personal account or by a shared, "
            "password-protected drawer."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # ── Middleware (last added runs first) ────────────────────────────────
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(drawers.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "notedrawer.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
