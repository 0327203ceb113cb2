"""CLI command for checking a free-text address without the API server.

Uses the configured region directory, preloaded addresses and geocoder.
The eligibility cache is used when Redis is reachable.
"""

import asyncio

import typer


def check(
    address: str = typer.Argument(..., help="Free-text address, e.g. '212 Encounter Bay, Alameda, CA 90255'"),
) -> None:
    """Check whether a free-text address is eligible."""
    eligible = asyncio.run(_check(address))
    if eligible is None:
        raise typer.Exit(code=2)
    if not eligible:
        raise typer.Exit(code=1)


async def _check(address: str) -> bool | None:
    """Async implementation of the free-text check."""
    from eligibility_api.core.cache import dispose_redis, init_redis
    from eligibility_api.core.config import get_settings
    from eligibility_api.lib.geocoder import get_geocoder
    from eligibility_api.lib.preloaded import load_preloaded_directory
    from eligibility_api.lib.regions import load_region_directory
    from eligibility_api.lib.rules import EligibilityRuleEngine
    from eligibility_api.services.cache_service import LookupCache, ResultCache
    from eligibility_api.services.eligibility_service import AddressEligibilityService
    from eligibility_api.services.lookup_service import AddressLookupService

    settings = get_settings()
    client = init_redis(settings.redis_url, timeout=settings.redis_timeout)
    ttl = settings.eligibility_cache_duration

    try:
        service = AddressEligibilityService(
            None,
            rule_engine=EligibilityRuleEngine(
                rules_enabled=settings.eligibility_rules_enabled,
                min_confidence_score=settings.eligibility_min_confidence_score,
            ),
            result_cache=ResultCache(client, ttl_seconds=ttl),
            lookup_service=AddressLookupService(LookupCache(client, ttl_seconds=ttl), get_geocoder(settings)),
            region_directory=load_region_directory(settings.eligible_regions_path),
            preloaded_directory=load_preloaded_directory(settings.preloaded_addresses_path),
        )
        response = await service.check_address_text(address)
    finally:
        await dispose_redis()

    if response is None:
        typer.echo("address not found")
        return None

    typer.echo("address_eligible" if response.eligible else "address not eligible")
    if response.reason:
        typer.echo(f"  Reason:     {response.reason}")
    if response.address and response.address.formatted_address:
        typer.echo(f"  Address:    {response.address.formatted_address}")
    if response.matched_zones:
        typer.echo(f"  Matched:    {', '.join(response.matched_zones)}")
    return response.eligible
