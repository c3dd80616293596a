"""
Product API - FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ /api/Product  (CRUD)         │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ NotFound→404 │ Database/PyMongo→500 │ *→500   │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the ProductDbContext (fatal on missing configuration)
    3. Log startup complete

    Shutdown:
    1. Close the MongoDB client
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app import __version__
from app.config import settings
from app.database import ProductDbContext
from app.exceptions import (
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    ProductAPIError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import health, products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Third-party loggers that chatter at INFO are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the shared ProductDbContext on startup and close it on shutdown.

    A ConfigurationError is logged and re-raised, which makes uvicorn abort
    startup: the process never serves requests without its store settings.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Product API %s starting up...", __version__)

    try:
        app.state.db = ProductDbContext(settings)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e.message)
        raise

    logger.info("CORS origins: %s", ", ".join(settings.cors_origins_list))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Product API shutting down...")
    await app.state.db.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside the middleware that set the ContextVar.
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _server_error(rid: str, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": error, "message": message, "request_id": rid},
        headers={REQUEST_ID_HEADER: rid} if rid else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        NotFoundError     → 404 Not Found
        DatabaseError     → 500 (generic message; context logged)
        ProductAPIError   → 500 (catch-all for custom errors)
        PyMongoError      → 500 (storage/transport failure; not retried)
        Exception         → 500 (unexpected errors, stack trace logged)

    Responses never contain driver messages or stack traces.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested product doesn't exist."""
        rid = _request_id(request)
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _server_error(rid, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(ProductAPIError)
    async def handle_application_error(request: Request, exc: ProductAPIError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _server_error(rid, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(PyMongoError)
    async def handle_storage_error(request: Request, exc: PyMongoError):
        """The document store failed or could not be reached."""
        rid = _request_id(request)
        logger.error(
            "[%s] Storage error (%s): %s",
            rid,
            type(exc).__name__,
            str(exc),
            exc_info=exc,
        )
        return _server_error(rid, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return _server_error(
            rid,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance. The ProductDbContext is
    attached by the lifespan, so building the app has no side effects.
    """
    app = FastAPI(
        title="Product API",
        description="CRUD API for products stored in MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS.

    # Every origin, method and header is allowed unless CORS_ORIGINS narrows it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router)
    app.include_router(health.router)

    return app


app = create_app()
