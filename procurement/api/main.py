"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from procurement.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from procurement.api.middleware.error_handler import setup_exception_handlers
from procurement.api.routes import (
    dashboard_router,
    health_router,
    inventory_router,
    invoices_router,
    materials_router,
    payments_router,
    purchase_orders_router,
)
from procurement.config import configure_logging, get_logger, get_settings
from procurement.core.exceptions import DatabaseError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Applies migrations and opens the connection pool on startup, closes
    the pool on shutdown.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        environment=settings.environment,
    )

    # Initialize database
    try:
        from procurement.infrastructure.storage.sqlite import get_pool
        from procurement.infrastructure.storage.sqlite.migrations.migrator import initialize_database

        # Run migrations
        failed = [r for r in await initialize_database() if not r.success]
        if failed:
            raise DatabaseError("migrate", failed[0].error or f"v{failed[0].version} failed")
        logger.info("database_initialized")

        # Initialize connection pool
        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    try:
        from procurement.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Procurement Ledger API",
        description="Purchase orders, invoices, payments and inventory",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(materials_router)
    app.include_router(purchase_orders_router)
    app.include_router(invoices_router)
    app.include_router(payments_router)
    app.include_router(inventory_router)
    app.include_router(dashboard_router)

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict[str, str]:
    """Return API info."""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Root health endpoint (for k8s/docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": get_settings().app_version,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "procurement.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
