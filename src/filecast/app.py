"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from filecast.config import Settings
from filecast.errors import register_exception_handlers
from filecast.events import SubscriberRegistry
from filecast.middleware.cors import configure_cors
from filecast.middleware.logging import RequestLoggingMiddleware
from filecast.routes import events, greeting, health, upload, users
from filecast.storage import BlobStore, UserRepository

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Builds the single subscriber registry, the blob store and the user
    repository on startup and exposes them on ``app.state`` for injection
    into handlers. On shutdown the registry is closed, ending any open
    event streams, and the database is closed.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("api_startup", host=settings.host, port=settings.port)

    registry = SubscriberRegistry(sink_queue_size=settings.sse_queue_size)

    blob_store = BlobStore(settings.upload_dir)
    blob_store.initialize()

    user_repository = UserRepository(settings.database_path)
    user_repository.initialize()

    app.state.registry = registry
    app.state.blob_store = blob_store
    app.state.user_repository = user_repository

    try:
        yield
    finally:
        registry.close()
        user_repository.close()
        logger.info("api_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Filecast API",
        description="File uploads with live Server-Sent Events notifications.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.state.settings = settings

    register_exception_handlers(app)
    configure_cors(app, settings.cors_origins)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(greeting.router)
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(upload.router)
    app.include_router(events.router)

    return app
