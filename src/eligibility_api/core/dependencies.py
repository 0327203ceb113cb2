"""FastAPI dependency injection for sessions, caches and eligibility services.

Startup-loaded data (region directory, preloaded addresses, geocoder) lives
on ``app.state``; per-request handles are built from it here.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.core.cache import get_redis
from eligibility_api.core.config import Settings, get_settings
from eligibility_api.core.database import get_session_factory
from eligibility_api.lib.geocoder import BaseGeocoder
from eligibility_api.lib.preloaded import PreloadedAddressDirectory
from eligibility_api.lib.regions import RegionDirectory
from eligibility_api.lib.rules import EligibilityRuleEngine
from eligibility_api.services.cache_service import LookupCache, ResultCache
from eligibility_api.services.eligibility_service import AddressEligibilityService
from eligibility_api.services.lookup_service import AddressLookupService


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_redis_client() -> redis.Redis:
    """Return the process-wide Redis client."""
    return get_redis()


def get_lookup_cache(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LookupCache:
    return LookupCache(client, ttl_seconds=settings.eligibility_cache_duration)


def get_result_cache(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ResultCache:
    return ResultCache(client, ttl_seconds=settings.eligibility_cache_duration)


def get_rule_engine(settings: Annotated[Settings, Depends(get_settings)]) -> EligibilityRuleEngine:
    return EligibilityRuleEngine(
        rules_enabled=settings.eligibility_rules_enabled,
        min_confidence_score=settings.eligibility_min_confidence_score,
    )


def get_region_directory(request: Request) -> RegionDirectory:
    """Return the region directory loaded at startup (empty if none was loaded)."""
    directory = getattr(request.app.state, "region_directory", None)
    return directory if directory is not None else RegionDirectory({})


def get_preloaded_directory(request: Request) -> PreloadedAddressDirectory:
    """Return the preloaded address directory loaded at startup."""
    directory = getattr(request.app.state, "preloaded_directory", None)
    return directory if directory is not None else PreloadedAddressDirectory()


def get_geocoder(request: Request) -> BaseGeocoder | None:
    return getattr(request.app.state, "geocoder", None)


def get_lookup_service(
    lookup_cache: Annotated[LookupCache, Depends(get_lookup_cache)],
    geocoder: Annotated[BaseGeocoder | None, Depends(get_geocoder)],
) -> AddressLookupService:
    return AddressLookupService(lookup_cache, geocoder)


def get_eligibility_service(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    rule_engine: Annotated[EligibilityRuleEngine, Depends(get_rule_engine)],
    result_cache: Annotated[ResultCache, Depends(get_result_cache)],
    lookup_service: Annotated[AddressLookupService, Depends(get_lookup_service)],
    region_directory: Annotated[RegionDirectory, Depends(get_region_directory)],
    preloaded_directory: Annotated[PreloadedAddressDirectory, Depends(get_preloaded_directory)],
) -> AddressEligibilityService:
    """Assemble the eligibility pipeline for one request."""
    return AddressEligibilityService(
        session,
        rule_engine=rule_engine,
        result_cache=result_cache,
        lookup_service=lookup_service,
        region_directory=region_directory,
        preloaded_directory=preloaded_directory,
    )
