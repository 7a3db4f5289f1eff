"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, Awaitable, Callable

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from cardquery.infrastructure.persistence.sqlalchemy.models import Base
from cardquery.presentation.api.dependencies import (
    REQUEST_GATE,
    SESSION_HEADER,
    get_engine,
)
from cardquery.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from cardquery.presentation.api.routers import (
    admin_router,
    feedback_router,
    search_router,
)
from cardquery_config.settings import CORS_WILDCARD, Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the cardquery application with:
    - Console output with timestamps and module names
    - Configurable log level for cardquery modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("cardquery").setLevel(log_level)
    logging.getLogger("cardquery_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "no-referrer",
}

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Search",
        "description": """Natural-language card search translation.

**Request path:**
1. Input checks (length, injection patterns, malformed operators)
2. Result cache (memory, then database)
3. Learned rules by exact normalized pattern
4. Extractor pipeline and renderer

**Sources:**
- `rule`: a learned translation rule matched the query
- `pipeline`: the extractor pipeline compiled the query
- `fallback`: the static keyword compiler (`/search/fallback`)
""",
    },
    {
        "name": "Feedback",
        "description": """User corrections that become translation rules.

**Statuses:**
- `pending` -> `processing` -> `completed` | `duplicate` | `skipped` |
  `failed` | `updated_existing`

A generated rule is only committed after it returns at least one card
from the live card database.
""",
    },
    {
        "name": "Admin",
        "description": "Pattern mining, stale feedback recovery and cache statistics.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(
        "Starting CardQuery API v%s (%s database)...",
        API_VERSION,
        get_settings().database_type,
    )
    engine = get_engine()
    await _init_database_schema(engine)
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down CardQuery API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Every route passes the request gate: auth, then rate limit, then
    body checks.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter(dependencies=REQUEST_GATE)

    v1_router.include_router(search_router, prefix="/search", tags=["Search"])
    v1_router.include_router(feedback_router, prefix="/feedback", tags=["Feedback"])
    v1_router.include_router(admin_router, prefix="/admin", tags=["Admin"])

    return v1_router


def _origin_gate(
    allowed_origins: list[str],
) -> Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]:
    """Build the hardening middleware.

    Every response gets the fixed security headers. A response to an
    origin outside the allowlist names the first allowlisted origin
    instead, so browsers refuse to hand it to the caller.
    """
    open_to_all = CORS_WILDCARD in allowed_origins

    async def middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        origin = request.headers.get("origin")
        if origin and not open_to_all and origin not in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = allowed_origins[0]
            response.headers["Vary"] = "Origin"
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    return middleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description=(
            "Translates **natural-language card searches** into "
            "**Scryfall search syntax**, learning new rules from user feedback."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.middleware("http")(_origin_gate(settings.cors_origins))

    # Configure CORS (outermost, so preflights never reach the gate)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", SESSION_HEADER],
        max_age=86400,
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    # Include versioned API router
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Returns service status and version info.
        Unversioned for load balancer/monitoring compatibility.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    # Root endpoint with API info
    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "search": f"{API_V1_PREFIX}/search",
                "feedback": f"{API_V1_PREFIX}/feedback",
                "admin": f"{API_V1_PREFIX}/admin",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
