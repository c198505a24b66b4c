"""
Storefront Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       holding its own OrderStore and CatalogService.
Who:   Called by uvicorn (uvicorn storefront.main:app) or the `storefront`
       console script (run()).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Req ID      │→│ Logging  │→│  CORS           │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /api/catalog │ │/api/order│ │ /health         │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │  Static: /images/* → IMAGES_ROOT                    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Catalog→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storefront import __version__
from storefront.config import settings
from storefront.exceptions import (
    CatalogReadError,
    MalformedInputError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.middleware.cors import CORSHeadersMiddleware
from storefront.middleware.logging import RequestLoggingMiddleware
from storefront.middleware.request_id import RequestIDMiddleware, request_id_var
from storefront.routes import catalog, health, orders
from storefront.services.catalog_service import CatalogService
from storefront.services.order_store import OrderStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level:  settings.log_level
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

    # storefront.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, report configuration, warn on a missing images root.
    Shutdown: report how many orders are dropped with the process.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Storefront Backend %s starting up...", __version__)

    catalog_service: CatalogService = app.state.catalog_service
    if await catalog_service.is_readable():
        logger.info("Images directory: %s", catalog_service.images_root)
    else:
        logger.warning(
            "Images directory %s does not exist; catalog requests will fail with 500",
            catalog_service.images_root,
        )
    logger.info("Public base URL: %s", catalog_service.base_url)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info(
        "Storefront Backend shutting down; discarding %d in-memory orders",
        app.state.order_store.count(),
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a uniform JSON error body.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        MalformedInputError     → 400 Bad Request
        RequestValidationError  → 400 Bad Request (reported as malformed input)
        NotFoundError           → 404 Not Found
        CatalogReadError        → 500 Internal Server Error (OS error in message)
        StorefrontError (base)  → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error (generic message)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(MalformedInputError)
    async def handle_malformed_input(request: Request, exc: MalformedInputError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed input: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "malformed_input",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """
        FastAPI could not parse the body or a parameter (bad JSON, wrong
        shape, non-integer order id). Reported as a 400, not FastAPI's 422.
        """
        errors = exc.errors()
        if any(e.get("type") == "json_invalid" for e in errors):
            message = "invalid json"
        else:
            first = errors[0] if errors else {}
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = f"Invalid request at '{location}': {first.get('msg', 'malformed input')}"
        return await handle_malformed_input(
            request,
            MalformedInputError(
                message=message,
                context={
                    "errors": [
                        {"loc": [str(p) for p in e.get("loc", ())], "msg": e.get("msg", "")}
                        for e in errors
                    ]
                },
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(CatalogReadError)
    async def handle_catalog_read_error(request: Request, exc: CatalogReadError):
        """Images folder unreadable; the OS error stays in the message for operators."""
        rid = request_id_var.get("")
        logger.error("[%s] Catalog read error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    order_store: Optional[OrderStore] = None,
    catalog_service: Optional[CatalogService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        order_store: Store to serve orders from. A new, empty one by default.
        catalog_service: Catalog lister. Built from settings by default.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Storefront API",
        description=(
            "Product catalog backed by image folders, plus in-memory order tracking "
            "with admin list, hide and delete operations."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    catalog_service = catalog_service or CatalogService()
    app.state.order_store = order_store or OrderStore()
    app.state.catalog_service = catalog_service

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(CORSHeadersMiddleware, allow_origins=settings.cors_origins_list)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(orders.router)
    app.include_router(catalog.router)
    app.include_router(health.router)
    # Aliases last: a category may not take over a fixed route's path
    app.include_router(
        catalog.build_alias_router(
            catalog_service, taken_paths=[route.path for route in app.routes]
        )
    )

    # ── Static Images ─────────────────────────────────────────────────────
    # check_dir=False: a missing images root must not prevent startup
    app.mount(
        "/images",
        StaticFiles(directory=str(catalog_service.images_root), check_dir=False),
        name="images",
    )

    return app


def run() -> None:
    """Console entry point: serve the app on settings.host:settings.port."""
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
