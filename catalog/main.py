"""
Catalog Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` assembles middleware, exception handlers, routers and
       the app-scoped collaborators; `lifespan()` connects external services
       at startup and releases them at shutdown.
Who:   uvicorn imports `catalog.main:app`; tests call `create_app()` with an
       in-memory store and a fake media host.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │    /api/login   /api/products[/{id}]   /api/upload  │
    │    /health                                          │
    │                                                     │
    │  Exception Handlers:                                │
    │    Validation→400  Authorization→401  NotFound→404  │
    │    Database/Media/FileStorage/unexpected→500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (missing MONGO_URI aborts startup)
    3. Connect to MongoDB and ping it (failure aborts startup)
    4. Configure the Cloudinary client

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from catalog import __version__
from catalog.config import Settings, settings as default_settings
from catalog.database import close_client, create_client, get_products_collection
from catalog.exceptions import (
    AuthorizationError,
    CatalogError,
    DatabaseError,
    FileStorageError,
    MediaUploadError,
    NotFoundError,
    ValidationError,
)
from catalog.middleware.logging import RequestLoggingMiddleware
from catalog.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from catalog.routes import auth, health, products, upload
from catalog.services.auth_service import Authorizer
from catalog.services.cloudinary_service import CloudinaryService
from catalog.services.file_service import StagingService
from catalog.services.media_base import MediaHost
from catalog.services.mongo_store import MongoProductStore
from catalog.services.store_base import ProductStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] catalog.routes.products: message
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect external services on startup, release them on shutdown.

    Collaborators injected through `create_app()` are left untouched; only
    missing ones are built here. Any exception raised before `yield` makes
    uvicorn abort startup and exit, which is the intended outcome for a
    missing MONGO_URI or an unreachable database. A client created before
    the failure is closed first.
    """
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("Catalog backend %s starting up...", __version__)

    if app.state.store is None:
        client = None
        try:
            config.validate_required_for_production()
            client = create_client(config)
            store = MongoProductStore(get_products_collection(client, config), client=client)
            await store.ping()
            await store.ensure_indexes()
        except Exception as e:
            if isinstance(e, CatalogError):
                logger.critical("Startup aborted: %s | Context: %s", e.message, e.context)
            else:
                logger.critical("Startup aborted: %s", str(e), exc_info=True)
            if client is not None:
                await close_client(client)
            raise
        app.state.store = store
        logger.info("MongoDB connected")

    if app.state.media_host is None:
        app.state.media_host = CloudinaryService(config)

    logger.info("Staging directory: %s", app.state.staging.staging_root)
    logger.info("Server ready on %s:%d", config.host, config.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Catalog backend shutting down...")
    await app.state.store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes.

    Every error body is `{"ok": false, "error": <message>}`. Context dicts
    and stack traces are logged, never returned.

        ValidationError, RequestValidationError → 400
        AuthorizationError                      → 401
        NotFoundError                           → 404
        DatabaseError                           → 500 "Server error"
        MediaUploadError, FileStorageError      → 500 "Upload failed"
        CatalogError (base), Exception          → 500 "Server error"
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), exc.errors())
        return error_response(400, "Invalid request")

    @app.exception_handler(AuthorizationError)
    async def handle_authorization_error(request: Request, exc: AuthorizationError):
        return error_response(401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return error_response(500, "Server error")

    @app.exception_handler(MediaUploadError)
    async def handle_media_upload_error(request: Request, exc: MediaUploadError):
        logger.error(
            "[%s] Media upload error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return error_response(500, "Upload failed")

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error(
            "[%s] File storage error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return error_response(500, "Upload failed")

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        logger.error(
            "[%s] Unhandled application error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return error_response(500, "Server error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(500, "Server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
    media_host: Optional[MediaHost] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:   Configuration; defaults to the environment-loaded Settings.
        store:      Product store; when None, MongoDB is connected at startup.
        media_host: Image host; when None, Cloudinary is configured at startup.
    """
    config = settings or default_settings

    app = FastAPI(
        title="Catalog API",
        description=(
            "Product catalog backed by MongoDB, with admin-gated writes and "
            "image hosting on Cloudinary."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.authorizer = Authorizer(
        admin_token=config.admin_token,
        admin_password=config.admin_password,
    )
    app.state.staging = StagingService(config.upload_tmp_dir)
    app.state.store = store
    app.state.media_host = media_host

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(upload.router)
    app.include_router(health.router)

    return app


app = create_app()
