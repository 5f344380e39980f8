"""
Contacts API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       the contact store and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app), or by
       run() via the `contacts-api` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────┐ ┌──────┐ ┌─────────────────┐              │
    │  │ CORS │→│ GZip │→│ Request Context │              │
    │  └──────┘ └──────┘ └─────────────────┘              │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────┐ ┌─────────────┐ ┌─────┐          │
    │  │ /contacts/... │ │ GET /health │ │ GET/│          │
    │  └───────────────┘ └─────────────┘ └─────┘          │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Conflict→409 │   │
    │  │ other → 500                                  │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state.contact_store: ContactStore              │
    └─────────────────────────────────────────────────────┘

Shutdown on SIGINT/SIGTERM is handled by uvicorn, which runs the lifespan
exit before the process ends. The store is in memory, so there is nothing
to flush.
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import ContactsError, ValidationError
from app.middleware.request_context import RequestContextMiddleware, internal_error_response
from app.routes import contacts, health
from app.store import ContactStore

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
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.app_name, __version__)
    logger.info("Environment: %s", settings.environment)
    logger.info("Contacts in store: %d", app.state.contact_store.count())
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("%s shutting down...", settings.app_name)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(error: str, message: str, details: Optional[List[str]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error, "message": message}
    if details:
        body["details"] = details
    return body


def _describe_request_error(error: Dict[str, Any]) -> str:
    if error.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError           → 400 {error, message, details}
        NotFoundError             → 404 {error, message}
        ConflictError             → 409 {error, message}
        ContactsError (base)      → 500 {error, message}
        RequestValidationError    → 400 (body that isn't valid JSON)
        HTTPException             → its own status (unmatched route → 404)
        Exception (fallback)      → 500, generic message; stack trace only
                                    when ENVIRONMENT=development

    Context dicts on our exceptions are logged, never returned.
    """

    @app.exception_handler(ContactsError)
    async def handle_contacts_error(request: Request, exc: ContactsError):
        rid = getattr(request.state, "request_id", "")
        details = exc.details if isinstance(exc, ValidationError) else None
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.error_name, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s %s", rid, exc.error_name, exc.message, details or "")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error_name, exc.message, details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = getattr(request.state, "request_id", "")
        details = [_describe_request_error(e) for e in exc.errors()]
        logger.warning("[%s] Malformed request: %s", rid, details)
        return JSONResponse(
            status_code=400,
            content=error_body("ValidationError", "Input validation failed", details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            content = error_body("NotFoundError", f"Resource {request.url.path} not found")
        else:
            phrase = HTTPStatus(exc.status_code).phrase
            content = error_body(phrase.title().replace(" ", "").replace("-", ""), str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )

    # Route failures are answered by RequestContextMiddleware; this only
    # sees errors raised by the outer middleware themselves.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return internal_error_response(exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[ContactStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Contact store to serve. When None a new one is built, seeded
               with the example contacts if SEED_EXAMPLE_CONTACTS is set.
               Tests pass their own isolated store.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Contact list management: CRUD, search and statistics over an in-memory store.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if store is None:
        store = ContactStore(seed=settings.seed_example_contacts)
    app.state.contact_store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first).
    # CORS is outermost so every response, the uncaught-error 500 included,
    # gets its headers.
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(contacts.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


def run() -> None:
    """Start uvicorn with the configured host and port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `app.main:app` to be importable
app = create_app()
