"""The Vault API - Main FastAPI Application.

This module provides the main FastAPI application for The Vault.
It includes:
- CORS middleware configuration
- API key protection for admin writes
- Exception handlers mapping Vault errors to ``{message, error}`` responses
- Health check and Prometheus metrics endpoints
- Component, category, media, catalog and migration endpoints

Usage:
    # Run with uvicorn
    uvicorn vault.api.main:app --reload

    # Or run directly
    python -m vault.api.main
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from vault import __version__
from vault.api.dependencies import get_storage, reset_dependencies
from vault.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from vault.api.routes.catalog import router as catalog_router
from vault.api.routes.categories import router as categories_router
from vault.api.routes.components import router as components_router
from vault.api.routes.health import router as health_router, set_server_start_time
from vault.api.routes.media import router as media_router
from vault.api.routes.migration import router as migration_router
from vault.config.settings import get_settings
from vault.core.exceptions import (
    ConfigurationError,
    MediaError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    VaultError,
)
from vault.core.logging import configure_logging
from vault.monitoring.metrics import get_metrics_app

logger = structlog.get_logger(__name__)

# API metadata for OpenAPI documentation
API_TITLE = "The Vault API"
API_DESCRIPTION = """
## Catalog of reusable UI components

The Vault stores HTML/CSS/JS snippets with preview media, tags and categories.

### Sources

- **Registry**: code-authored components compiled into the service
- **Custom components**: a local JSON file awaiting migration
- **Dynamic store**: components created and edited through this API

The catalog endpoints merge all three; a dynamic edit of a registry component
overrides it.

### Authentication

Set `API_KEY_ENABLED=true` and `API_KEY=your-secret-key` to require the
`X-API-Key` header on every write (non-GET) request.
"""
API_VERSION = __version__


# =============================================================================
# API Key Authentication Middleware
# =============================================================================


class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Middleware to validate the API key on write requests.

    Reads (GET, HEAD, OPTIONS) stay public so the catalog pages work without
    credentials. Enable by setting API_KEY_ENABLED=true and API_KEY=<secret>.
    """

    # Endpoints that don't require authentication
    PUBLIC_PATHS = {"/", "/health", "/health/live", "/health/ready", "/docs", "/redoc", "/openapi.json"}
    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

    async def dispatch(self, request: Request, call_next):
        settings = get_settings()

        # Skip auth if disabled
        if not settings.api_key_enabled:
            return await call_next(request)

        if request.method in self.SAFE_METHODS or request.url.path in self.PUBLIC_PATHS:
            return await call_next(request)

        # Validate API key
        api_key = request.headers.get("X-API-Key")
        expected_key = settings.api_key.get_secret_value() if settings.api_key else None

        if not expected_key:
            logger.error("api_key_enabled_but_not_set")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "configuration_error",
                    "message": "Server misconfiguration: API key authentication enabled but no key configured",
                },
            )

        if not api_key:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "unauthorized", "message": "Missing X-API-Key header"},
            )

        if api_key != expected_key:
            logger.warning("invalid_api_key_attempt", path=request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "unauthorized", "message": "Invalid API key"},
            )

        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: configure logging, provision media storage
    - Shutdown: drop cached clients and services
    """
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=not settings.is_development)

    logger.info("application_starting", environment=settings.app_env, version=API_VERSION)
    set_server_start_time()

    storage = get_storage()
    try:
        await storage.ensure_ready()
        logger.info("storage_ready", backend=storage.backend)
    except (VaultError, OSError) as e:
        logger.error("storage_initialization_failed", backend=storage.backend, error=str(e))

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    reset_dependencies()
    logger.info("application_stopped")


# Create FastAPI application
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {"name": "Health", "description": "System health and status endpoints"},
        {"name": "Components", "description": "Create, update and delete dynamic components"},
        {"name": "Categories", "description": "List and add categories"},
        {"name": "Media", "description": "Preview image and video uploads"},
        {"name": "Catalog", "description": "Merged, read-only catalog for public pages"},
        {"name": "Migration", "description": "Move custom components into the dynamic store"},
    ],
)

# Configure CORS middleware (from settings)
_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allowed_origins,
    allow_credentials=_settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key", "Accept"],
)

# Add API Key authentication middleware
app.add_middleware(APIKeyMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    detail: str | None = None,
    fields: list[str] | None = None,
) -> JSONResponse:
    response = ErrorResponse(
        error=error,
        message=message,
        detail=detail,
        fields=fields,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", exclude_none=True),
    )


@app.exception_handler(ValidationError)
async def vault_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Missing or invalid caller-supplied fields."""
    logger.info("request_rejected", path=request.url.path, fields=exc.fields)
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        exc.message,
        fields=exc.fields,
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(request, status.HTTP_404_NOT_FOUND, "not_found", exc.message)


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Store failures. The cause is logged; clients get a generic message."""
    logger.error(
        "persistence_error",
        path=request.url.path,
        method=request.method,
        operation=exc.operation,
        cause=str(exc.cause) if exc.cause else None,
        cause_type=type(exc.cause).__name__ if exc.cause else None,
    )
    if isinstance(exc.cause, ConfigurationError):
        return _error_response(
            request,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "not_configured",
            exc.cause.message,
        )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "persistence_error",
        "A storage error occurred while processing the request",
        detail=str(exc) if get_settings().debug else None,
    )


@app.exception_handler(MediaError)
async def media_error_handler(request: Request, exc: MediaError) -> JSONResponse:
    logger.error("media_error", path=request.url.path, operation=exc.operation, details=exc.details)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "media_error",
        exc.message,
        detail=exc.details.get("reason"),
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("configuration_error", path=request.url.path, config_key=exc.config_key)
    return _error_response(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "not_configured",
        exc.message,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with detailed response."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append(ValidationErrorDetail(
            field=field,
            message=error["msg"],
            value=error.get("input"),
        ))

    response = ValidationErrorResponse(
        errors=errors,
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_server_error",
        "An unexpected error occurred",
        detail=str(exc) if get_settings().debug else None,
    )


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint - points at the documentation."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "api": "/api",
    }


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.mount("/metrics", get_metrics_app())

api_router = APIRouter(prefix="/api")
api_router.include_router(components_router)
api_router.include_router(categories_router)
api_router.include_router(media_router)
api_router.include_router(catalog_router)
api_router.include_router(migration_router)

app.include_router(api_router)


# =============================================================================
# Development Server
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "vault.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
