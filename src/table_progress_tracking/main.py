"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from table_progress_tracking import __version__
from table_progress_tracking.api.v1 import router as api_v1_router
from table_progress_tracking.core.app_config import get_app_config
from table_progress_tracking.core.config import get_settings
from table_progress_tracking.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from table_progress_tracking.db.session import close_db
from table_progress_tracking.middleware.logging import RequestLoggingMiddleware, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    # Setup logging
    setup_logging(settings.log_level, settings.log_format)

    # Validate central configuration (fail fast on startup)
    try:
        limits = get_app_config().processing_limits()
        logger.info(
            "Processing limits loaded: max_rows=%d, max_columns=%d, max_html_size=%d, "
            "max_processing_seconds=%s, max_input_size=%d",
            limits.max_rows,
            limits.max_columns,
            limits.max_html_size,
            limits.max_processing_seconds,
            limits.max_input_size,
        )
    except Exception as e:
        logger.critical("Failed to load central configuration: %s", e)
        raise SystemExit(1) from e

    yield

    # Cleanup database
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Per-user progress tracking for tables embedded in wiki pages",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API routers
    app.include_router(api_v1_router, prefix="/api/v1")

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers."""
        return {"status": "healthy", "service": "table-progress-tracking"}

    return app


# Create application instance
app = create_app()
