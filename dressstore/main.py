"""
DressStore Backend: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its Database handle injected and stored on app.state.
Who:   uvicorn (`uvicorn dressstore.main:app`), the `dressstore` console
       script (serve()), and the test suite (create_app(database=...)).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Access Logging │→│     CORS     │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────────────────────┐  │
    │  │ GET /        │ │ /product  (list/CRUD)        │  │
    │  │ GET /health  │ │ /product/{id}                │  │
    │  └──────────────┘ └──────────────────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ Persistence→500 │ Invalid→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the database and create missing tables
    3. Seed the sample catalogue (only if the connection succeeded)

    Shutdown:
    1. Dispose the database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dressstore import __version__
from dressstore.config import Settings, settings as default_settings
from dressstore.database import Database
from dressstore.exceptions import NotFoundError, PersistenceError
from dressstore.middleware.logging import RequestLoggingMiddleware
from dressstore.middleware.request_id import RequestIDMiddleware, request_id_var
from dressstore.routes import health, products
from dressstore.services.seed_service import seed_products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] dressstore.access: GET /product 200 ...
    Handler: stdout (container runtimes capture it).
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, database connection, seed. Shutdown: dispose engine.

    A failed connection is logged and the server keeps running; requests then
    fail with 500 until the database becomes reachable.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("DressStore backend %s starting up...", __version__)

    connected = False
    try:
        await database.connect()
        connected = True
    except Exception as e:
        logger.error("Could not connect to database: %s", str(e))

    if connected and app_settings.seed_on_startup:
        await seed_products(database, only_if_empty=app_settings.seed_only_if_empty)
    elif not connected:
        logger.warning("Skipping product seed: no database connection")

    logger.info("Server is running on port %d", app_settings.port)

    yield

    logger.info("DressStore backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten FastAPI validation errors into one line.

    Example: "Validation failed: name: Field required, price: Input should be a valid number"
    """
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "Validation failed: " + ", ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        NotFoundError           → 404 {"message": ...}
        PersistenceError        → 500 {"error": ...}
        RequestValidationError  → 500 {"error": "Validation failed: ..."}
        Exception (fallback)    → 500 {"error": ...}

    Body validation failures are operation failures like any other, so they
    share the 500 status instead of FastAPI's default 422.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s %s", rid, exc.resource, exc.resource_id)
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = format_validation_errors(exc)
        logger.warning("[%s] %s", rid, message)
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or "Internal server error"},
        )


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
        settings: Configuration; defaults to the module-level settings.
        database: Persistence handle; built from `settings` when omitted.
                  Tests pass their own to point the app at a scratch store.
    """
    settings = settings or default_settings
    database = database or Database.from_settings(settings)

    app = FastAPI(
        title="DressStore API",
        description="CRUD service for the DressStore product catalogue.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
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

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router)

    return app


app = create_app()


def serve() -> None:
    """Console-script entry point: run uvicorn on the configured host/port."""
    uvicorn.run(
        "dressstore.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
