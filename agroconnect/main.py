"""
FastAPI application for the AgroConnect marketplace.

To run: uvicorn agroconnect.main:create_app --factory --reload
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from agroconnect.api import build_api_router
from agroconnect.core.config import Settings, get_settings
from agroconnect.core.database import create_db_engine, create_session_factory, init_db
from agroconnect.error_handlers import (
    AppException,
    app_exception_handler,
    generic_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from agroconnect.logging_config import get_logger, setup_logging
from agroconnect.middleware import (
    RequestLoggingMiddleware,
    create_limiter,
    rate_limit_exceeded_handler,
)
from agroconnect.schemas.stats import HealthCheck
from agroconnect.seed import seed_sample_data
from agroconnect.services.weather import WeatherClient
from agroconnect.storage import EntityStore, MemoryStore, SQLStore

logger = get_logger("main")


def build_store(settings: Settings) -> EntityStore:
    """Create the configured Entity Store backend."""
    if settings.storage_backend == "memory":
        return MemoryStore()
    if settings.storage_backend != "sql":
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    engine = create_db_engine(settings)
    # Development convenience; deployments run the Alembic migrations
    init_db(engine)
    return SQLStore(create_session_factory(engine))


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[EntityStore] = None,
    weather_client: Optional[WeatherClient] = None
) -> FastAPI:
    """
    Build the application.

    Tests pass their own settings, store and weather client; otherwise
    everything is derived from the environment.
    """
    settings = settings or get_settings()
    setup_logging(
        settings.log_level,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count
    )
    limiter = create_limiter(settings.rate_limit_enabled)

    store = store or build_store(settings)
    weather_client = weather_client or WeatherClient(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Storage backend: {settings.storage_backend}")

        if settings.seed_sample_data:
            seed_sample_data(store, settings)

        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        store.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="AgroConnect - agricultural marketplace for farmers and buyers",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store
    app.state.weather_client = weather_client
    app.state.limiter = limiter

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Include API routers
    app.include_router(build_api_router(limiter, settings.auth_rate_limit))

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs" if settings.debug else "disabled",
            "api": "/api"
        }

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        """Simple health check endpoint."""
        return HealthCheck(
            status="healthy",
            version=settings.app_version,
            storage=store.name
        )

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "agroconnect.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug
    )
