"""
Flavors API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Run with `flavors-api serve` or `uvicorn flavors_api.main:create_app --factory`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ /api/flavors[/{id}] CRUD │ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ DB→500 │ →503 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the async engine (unless one was injected)
    3. If RESET_DB_ON_STARTUP: drop, recreate and seed the flavors table

    Shutdown:
    1. Dispose the engine it created (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from flavors_api import __version__
from flavors_api.config import Settings, get_settings
from flavors_api.database import create_engine, create_session_factory, dispose_engine
from flavors_api.exceptions import (
    FlavorsError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from flavors_api.middleware.logging import RequestLoggingMiddleware
from flavors_api.middleware.request_id import RequestIDMiddleware, request_id_var
from flavors_api.routes import flavors, health
from flavors_api.seed import initialize_on_startup

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown procedures.

    An engine passed to create_app() belongs to the caller and is not
    disposed here.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("Flavors API %s starting up...", __version__)

    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = create_engine(settings)
        app.state.session_factory = create_session_factory(app.state.engine)
    logger.info("Database engine created.")

    if settings.reset_db_on_startup:
        # Failures are logged inside; the server comes up regardless
        await initialize_on_startup(app.state.engine)

    logger.info("Server is running on http://%s:%d", settings.host, settings.port)

    yield

    logger.info("Flavors API shutting down...")
    if owns_engine:
        await dispose_engine(app.state.engine)
        app.state.engine = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and `{"error": ...}` bodies.

        RequestValidationError  → 400 (bad JSON body or non-integer id)
        ValidationError         → 400 (store rejected the values)
        NotFoundError           → 404 "Flavor not found"
        StoreUnavailableError   → 503 "Database unavailable"
        FlavorsError (incl. DatabaseError) → its status, action-specific message
        Exception (fallback)    → 500 "Internal server error"

    Driver details are logged server-side and never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Rejected request: %s", rid, exc.errors())
        return _error_response(
            400,
            "Invalid request",
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.message)

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] Store unavailable | Context: %s", rid, exc.context)
        return _error_response(503, exc.message)

    @app.exception_handler(FlavorsError)
    async def handle_flavors_error(request: Request, exc: FlavorsError):
        rid = request_id_var.get("")
        logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit settings; defaults to the environment.
        engine:   Pre-built engine (tests use in-memory SQLite). When omitted
                  the lifespan creates one from settings.database_url.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Flavors API",
        description="CRUD service for ice cream flavor records.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine) if engine is not None else None

    # Last added = first to execute: RequestID wraps Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(flavors.router)
    app.include_router(health.router)

    return app
