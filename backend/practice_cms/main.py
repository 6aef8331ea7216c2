"""
Practice CMS Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn practice_cms.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                        FastAPI App                           │
    │                                                              │
    │  Middleware Chain:                                           │
    │  CORS → Request ID → Logging → Admin Auth → Admin Rate Limit │
    │                                                              │
    │  Routes:                                                     │
    │  /api/{slug}  /api/admin/{slug}/...  (7 content types)       │
    │  /api/articles/...  /api/custom-codes/...                    │
    │  /api/config  /api/section-colors  /api/maintenance-check    │
    │  /health                                                     │
    │                                                              │
    │  Exception Handlers:                                         │
    │  Validation→400 │ Auth→401 │ NotFound→404 │ Conflict→409     │
    │  RateLimit→429  │ Database→500 │ anything else→500           │
    └──────────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from practice_cms import __version__
from practice_cms.config import settings
from practice_cms.database import dispose_engine
from practice_cms.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    PracticeCMSError,
    RateLimitExceededError,
    ValidationError,
)
from practice_cms.middleware.admin_auth import AdminAuthMiddleware
from practice_cms.middleware.logging import RequestLoggingMiddleware
from practice_cms.middleware.rate_limit import RateLimitMiddleware
from practice_cms.middleware.request_id import RequestIDMiddleware, request_id_var
from practice_cms.routes import (
    articles,
    config,
    custom_codes,
    documents,
    health,
    resources,
    support_messages,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Loggers worth knowing:
        practice_cms.access  one line per request (middleware/logging.py)
        practice_cms.audit   one line per admin mutation (services/audit.py)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  logging, configuration check, banner.
    Shutdown: dispose the engine so PostgreSQL frees its connections.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Practice CMS Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The server still starts: public pages and /health keep working,
        # and the admin gate answers 401 until the token is configured
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Practice CMS Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one error body shape:
        {"error": code, "message": text, "details"?: {...}, "request_id": id}

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        AuthenticationError                      → 401
        NotFoundError                            → 404
        ConflictError                            → 409
        RateLimitExceededError                   → 429
        DatabaseError                            → 500 (generic message)
        PracticeCMSError (base)                  → 500
        Exception (fallback)                     → 500 (stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body/path/query failed pydantic validation (missing field, non-integer id, ...)."""
        errors = [
            {
                "loc": [str(part) for part in err.get("loc", ())],
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Request data is invalid", {"errors": errors}),
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=401,
            content=_error_body("authentication_required", exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        """Stale expectedVersion — the client should reload and re-apply."""
        logger.info("[%s] Version conflict: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=409,
            content=_error_body("conflict", exc.message, exc.context),
        )

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return JSONResponse(
            status_code=429,
            content=_error_body("rate_limit_exceeded", exc.message, exc.context),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; context logged server-side only."""
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(PracticeCMSError)
    async def handle_application_error(request: Request, exc: PracticeCMSError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Practice CMS API",
        description=(
            "Content and configuration backend for a psychology practice website: "
            "ordered content collections, articles with a publish gate, and a "
            "key/JSON settings store."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost).
    # Execution order: CORS → RequestID → Logging → AdminAuth → RateLimit → GZip

    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(AdminAuthMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Outermost, so 401 and 429 short-circuits still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # Article and custom-code extras first: their literal segments
    # (/featured, /location) must win over generic path parameters
    app.include_router(articles.router)
    app.include_router(custom_codes.router)
    app.include_router(resources.public_router)
    app.include_router(resources.admin_router)
    app.include_router(config.router)
    app.include_router(documents.router)
    app.include_router(support_messages.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
