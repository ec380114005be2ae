import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from storefront.application.api.v1.errors import map_storefront_error
from storefront.application.api.v1.routes import customers, health
from storefront.application.di import create_container
from storefront.config import Config, configure_logging
from storefront.domain.shared.error import StorefrontError
from storefront.infrastructure.persistence.database import create_tables
from storefront.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_migrate:
        engine = await container.get(AsyncEngine)
        await create_tables(engine)
        logger.info("Database tables ensured")

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    configure_logging(config.logging)
    logger.info("Starting Storefront server: %s v%s", config.server.name, config.server.version)
    if not config.auth.customer_token.enabled:
        logger.info("Customer tokens disabled; resolving customers from the session only")

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(customers.router, prefix="/api/v1")

    # Global Storefront error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        http_exc = map_storefront_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
