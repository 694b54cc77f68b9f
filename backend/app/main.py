"""
QuickNotes Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns exactly one NoteStore and one NoteService.
Who:   Called by uvicorn to start the server (uvicorn app.main:app) and by
       the test suite, which builds a fresh app (and so a fresh store) per test.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐             │
    │  │  Req ID  │→│ Logging  │→│  CORS    │             │
    │  └──────────┘ └──────────┘ └──────────┘             │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌──────────────────────┐  │
    │  │ /api/notes  (CRUD)   │ │ GET / , GET /health  │  │
    │  └──────────────────────┘ └──────────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ValidationError→400 │ NotFound→404 │ else→500│   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state.note_service ──▶ NoteStore (in memory)   │
    └─────────────────────────────────────────────────────┘

Storage is volatile: every note is lost when the process exits.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import NotesError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, notes
from app.services.note_service import NoteService
from app.storage import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Set up logging on startup; report what is discarded on shutdown."""
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.app_name, __version__)
    logger.info("Notes API mounted at %s", settings.notes_prefix)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    discarded = len(app.state.note_service.store)
    logger.info("%s shutting down; discarding %d in-memory notes", settings.app_name, discarded)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    message: str,
    details: Optional[dict] = None,
    request_id: str = "",
) -> JSONResponse:
    rid = request_id or request_id_var.get("")
    content = {"success": False, "error": message, "request_id": rid}
    if details:
        content["details"] = details
    headers = {"X-Request-ID": rid} if rid else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map error kinds to HTTP status codes and the `success: false` envelope.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        NotFoundError            → 404 Not Found
        RequestValidationError   → 400 (malformed JSON or wrong field types)
        StarletteHTTPException   → its own status (unknown route, bad method)
        Exception (fallback)     → 500 with a generic message

    Internal details (tracebacks, exception text) are logged server-side only.
    """

    @app.exception_handler(NotesError)
    async def handle_notes_error(request: Request, exc: NotesError):
        logger.info(
            "[%s] %s %s rejected (%d): %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
        details = exc.context if isinstance(exc, ValidationError) else None
        return _error_response(exc.status_code, exc.message, details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.info("[%s] Malformed request body: %s", request_id_var.get(""), errors)
        return _error_response(400, "invalid request body", {"errors": errors})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs outside RequestIDMiddleware, so the ID comes from request.state
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            rid,
            request.method,
            request.url.path,
            str(exc),
            exc_info=exc,
        )
        return _error_response(500, "Internal Server Error", request_id=rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[NoteStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Note store to serve; a new empty one is created when omitted.

    Returns:
        Fully configured FastAPI instance whose app.state.note_service
        wraps the store.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Create, list, fetch, update and delete short text notes.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.note_service = NoteService(store if store is not None else NoteStore())

    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
