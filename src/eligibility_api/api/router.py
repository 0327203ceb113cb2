"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from eligibility_api.api.middleware import (
    ApiTokenMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    setup_cors,
)
from eligibility_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from eligibility_api.api.v1.address import address_router
    from eligibility_api.api.v1.cache import cache_router
    from eligibility_api.api.v1.regions import regions_router
    from eligibility_api.api.v1.zones import zones_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(address_router)
    root_router.include_router(cache_router)
    root_router.include_router(zones_router)
    root_router.include_router(regions_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(
        ApiTokenMiddleware,
        tokens=settings.api_token_list,
        public_paths=settings.api_public_path_list,
        enabled=settings.api_security_enabled,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.rate_limit_per_minute)
