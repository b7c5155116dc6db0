"""
VenueAtlas Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌────────────────┐   │
    │  │ Req ID   │→│  Access log  │→│  CORS          │   │
    │  └──────────┘ └──────────────┘ └────────────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌────────┐ ┌──────┐  │
    │  │/api/location │ │/api/user │ │/api/   │ │health│  │
    │  │              │ │          │ │ venue* │ │      │  │
    │  └──────────────┘ └──────────┘ └────────┘ └──────┘  │
    │           * behind the access control chain         │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation/Duplicate/Conflict→400 │ Auth→401 │   │
    │  │ Forbidden→403 │ NotFound→404 │ anything→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    ConflictError,
    DatabaseError,
    DuplicateKeyError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
    VenueAtlasError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, locations, users, venues

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] app.services.venue_service: Venue created: ...
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, validate settings, log readiness.
    Shutdown: dispose the database engine (close all pooled connections).
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("VenueAtlas Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: development setups run on the defaults
        logger.warning("Configuration warning: %s", str(e))

    logger.info("Identity header: %s", settings.user_id_header)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("VenueAtlas Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build the standard `{success: false, ...}` error body."""
    content = {
        "success": False,
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def describe_validation_errors(exc: RequestValidationError) -> tuple[str, list]:
    """
    Flatten FastAPI's schema errors into one readable message plus a list
    of `{field, message}` entries.
    """
    problems = []
    for err in exc.errors():
        # loc is e.g. ("body", "placeName") or ("path", "location_id")
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        if err.get("type") == "missing":
            msg = "Field required"
        problems.append({"field": field, "message": msg})

    if not problems:
        return "Invalid request", problems
    missing = [p["field"] for p in problems if p["message"] == "Field required"]
    if missing:
        return f"Missing required field(s): {', '.join(missing)}", problems
    first = problems[0]
    return f"{first['field']}: {first['message']}" if first["field"] else first["message"], problems


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the standard error body.

    Handler table:
        ValidationError / RequestValidationError → 400 validation_error
        DuplicateKeyError                        → 400 duplicate_key
        ConflictError                            → 400 conflict
        UnauthenticatedError                     → 401 unauthenticated
        ForbiddenError                           → 403 forbidden
        NotFoundError                            → 404 not_found
        DatabaseError                            → 500 server_error
        VenueAtlasError (base)                   → 500 server_error
        Exception (fallback)                     → 500 internal_server_error

    Server errors carry the raw error message to the client; the stack trace
    stays in the server log.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message, problems = describe_validation_errors(exc)
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return error_response(400, "validation_error", message, {"errors": problems})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(DuplicateKeyError)
    async def handle_duplicate_key(request: Request, exc: DuplicateKeyError):
        return error_response(400, "duplicate_key", exc.message, exc.context)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return error_response(400, "conflict", exc.message, exc.context)

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError):
        return error_response(401, "unauthenticated", exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        return error_response(403, "forbidden", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(VenueAtlasError)
    async def handle_app_error(request: Request, exc: VenueAtlasError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True
        )
        return error_response(500, "internal_server_error", str(exc) or type(exc).__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="VenueAtlas API",
        description=(
            "Locations, users, and venues. Locations form a tree; user and venue "
            "listings can be scoped to a location and everything beneath it. "
            "Venue routes identify the caller by the x-user-id header."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last one added
    # (RequestID) sees the request first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(locations.router)
    app.include_router(users.router)
    app.include_router(venues.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
