"""
PartCat Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Keeps middleware registration, route mounting, error mapping and
       lifecycle management in one place.
How:   create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn partcat.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐              │
    │  │  Req ID  │→│ Logging  │→│   CORS   │              │
    │  └──────────┘ └──────────┘ └──────────┘              │
    │                                                      │
    │  Routes:                                             │
    │  ┌────────┐ ┌───────┐ ┌────────────┐ ┌────────┐      │
    │  │ / /hlth│ │ /user │ │ /component │ │ /image │      │
    │  └────────┘ └───────┘ └────────────┘ └────────┘      │
    │              (Email/Password headers required)       │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Validation→400 │ Unauthorized→401 │ NotFound→404    │
    │  Persistence→400 │ anything else→500                 │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration
    3. Create missing tables and the storage directory
    4. Create the bootstrap account if configured

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from partcat import __version__
from partcat.config import settings
from partcat.database import (
    PersistenceGateway,
    async_session_factory,
    dispose_engine,
    init_models,
)
from partcat.exceptions import (
    NotFoundError,
    PartCatError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)
from partcat.middleware.logging import RequestLoggingMiddleware
from partcat.middleware.request_id import RequestIDMiddleware, request_id_var
from partcat.routes import components, health, images, users
from partcat.services.user_service import user_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("PartCat Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    await init_models()
    logger.info("Database schema ready")

    storage = Path(settings.storage_root)
    storage.mkdir(parents=True, exist_ok=True)
    logger.info("Image storage directory: %s", storage.resolve())

    async with async_session_factory() as session:
        try:
            await user_service.ensure_admin(PersistenceGateway(session))
        except PartCatError as e:
            # The API stays up; accounts can still be created by an existing user
            logger.error("Bootstrap account not created: %s | Context: %s", e.message, e.context)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("PartCat Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON bodies.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed body or path)
        UnauthorizedError       → 401 Unauthorized
        NotFoundError           → 404 Not Found
        PersistenceError        → 400 Bad Request (generic message)
        PartCatError (base)     → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Every body has the shape {"error": <message>, "request_id": <id>}.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "details": exc.context, "request_id": rid},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body or path parameter could not be parsed."""
        rid = request_id_var.get("")
        errors = exc.errors()
        logger.warning("[%s] Malformed request: %s", rid, errors)
        fields = [".".join(str(part) for part in err.get("loc", ())) for err in errors]
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data.", "details": {"fields": fields}, "request_id": rid},
        )

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=401,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        """Generic message to the client, driver details logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(PartCatError)
    async def handle_partcat_error(request: Request, exc: PartCatError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": "An internal error occurred.", "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred.", "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers."""
    app = FastAPI(
        title="PartCat API",
        description=(
            "Catalog of electronic components with images and user accounts. "
            "Every resource route requires Email and Password headers."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(components.router)
    app.include_router(images.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
