"""
TravelMap Backend - FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app), or run
       directly with `python -m app.main`.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                        FastAPI App                           │
    │                                                              │
    │  Middleware Chain:                                           │
    │  ┌──────┐ ┌────────┐ ┌─────────┐ ┌─────────┐ ┌────────────┐  │
    │  │ CORS │→│ Req ID │→│ Logging │→│ Timeout │→│ Error 500  │  │
    │  └──────┘ └────────┘ └─────────┘ └─────────┘ └────────────┘  │
    │                                                              │
    │  Routes:                                                     │
    │  ┌──────────────────┐ ┌─────────────────┐ ┌──────────────┐   │
    │  │ travel points (5)│ │ travel routes(3)│ │ members (3)  │   │
    │  └──────────────────┘ └─────────────────┘ └──────────────┘   │
    │                              GET /health                     │
    │                                                              │
    │  Exception Handlers:                                         │
    │  ┌────────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ DB→500 │ unmatched→404 │  │
    │  └────────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────────┘

Every error body has the shape {"error": "<message>"}.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Build the connection pool and ping the database with backoff

    Shutdown:
    1. Dispose the pool (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings
from app.database import Database
from app.exceptions import DatabaseError, NotFoundError, TravelMapError, ValidationError
from app.middleware.cors import CORSHeadersMiddleware
from app.middleware.error_boundary import ErrorBoundaryMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware, request_id_var
from app.middleware.timeout import RequestTimeoutMiddleware
from app.routes import health, members, travel_points, travel_routes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s

    The request ID comes from RequestIDLogFilter and is "-" for records
    emitted outside a request (startup, shutdown).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # The access log lives in travelmap.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Validate critical configuration
        3. Create the pool and wait for the database to answer

    Shutdown sequence:
        1. Dispose the pool

    A database that never comes up is logged but does not stop the server:
    /health reports 503 and data routes return 500 until it is reachable.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("TravelMap Backend %s starting up...", __version__)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("Configuration warning: %s", str(e))

    database = Database.from_settings(app_settings)
    app.state.database = database
    try:
        await database.wait_until_ready(attempts=app_settings.db_connect_attempts)
    except Exception as e:
        logger.error(
            "Database unreachable after %d attempts: %s",
            app_settings.db_connect_attempts,
            str(e),
        )

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("TravelMap Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def format_validation_errors(exc: RequestValidationError) -> str:
    """Joins FastAPI's validation errors as 'body.lat: <msg>; query.minLon: <msg>'."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register handlers that map exceptions to {"error": message} responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed JSON, wrong types)
        NotFoundError           → 404 Not Found
        HTTP 404 / 405          → 404 {"error": "not found"}
        DatabaseError           → 500 with the driver's message
        TravelMapError (base)   → 500

    Anything else is handled by ErrorBoundaryMiddleware.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc)
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown path and known path with the wrong method look the same to clients
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(TravelMapError)
    async def handle_travelmap_error(request: Request, exc: TravelMapError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration to build the app from (tests pass their own).

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="TravelMap API",
        description=(
            "Geospatial backend for a travel-map application: points of interest, "
            "routes between them, and the team roster, stored in PostGIS."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last one added
    # is outermost. Resulting order: CORS → RequestID → Logging → Timeout → ErrorBoundary
    app.add_middleware(ErrorBoundaryMiddleware)
    app.add_middleware(
        RequestTimeoutMiddleware,
        timeout_seconds=app_settings.request_timeout_seconds,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSHeadersMiddleware,
        allow_origin=app_settings.cors_allow_origin,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(travel_points.router)
    app.include_router(travel_routes.router)
    app.include_router(members.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.backend_host, port=settings.port)
