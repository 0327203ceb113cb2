"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from eligibility_api.core.cache import dispose_redis, init_redis, ping_redis
from eligibility_api.core.config import get_settings
from eligibility_api.core.database import dispose_engine, init_engine_from_settings, ping_database
from eligibility_api.core.logging import setup_logging_from_settings
from eligibility_api.lib.geocoder import get_geocoder
from eligibility_api.lib.preloaded import load_preloaded_directory
from eligibility_api.lib.regions import load_region_directory


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle.

    On startup: initialize the database engine and Redis client, then load
    the eligible regions, preloaded addresses and geocoder onto ``app.state``.
    On shutdown: close Redis and dispose the engine.
    """
    settings = get_settings()
    setup_logging_from_settings(settings)
    init_engine_from_settings(settings)
    if not await ping_database():
        logger.warning("Database is unreachable; structured checks and zone administration will fail")
    init_redis(settings.redis_url, timeout=settings.redis_timeout)
    if not await ping_redis():
        logger.warning("Redis is unreachable; eligibility caching will be skipped")

    app.state.region_directory = load_region_directory(settings.eligible_regions_path)
    app.state.preloaded_directory = load_preloaded_directory(settings.preloaded_addresses_path)
    app.state.geocoder = get_geocoder(settings)
    if app.state.geocoder is None:
        logger.warning("No geocoder configured; free-text lookups will only use preloaded addresses")

    yield

    await dispose_redis()
    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Eligibility API",
        description="Address eligibility lookups against zones, regions and curated addresses",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register exception handlers
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    # Register middleware and routers
    from eligibility_api.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
