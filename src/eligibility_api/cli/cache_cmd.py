"""Eligibility cache CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer

from eligibility_api.services.cache_service import ResultCache

cache_app = typer.Typer()

T = TypeVar("T")


async def _with_cache(action: Callable[[ResultCache], Awaitable[T]]) -> T:
    """Run ``action`` against a result cache bound to a fresh Redis client."""
    from eligibility_api.core.cache import dispose_redis, init_redis
    from eligibility_api.core.config import get_settings

    settings = get_settings()
    client = init_redis(settings.redis_url, timeout=settings.redis_timeout)
    try:
        return await action(ResultCache(client, ttl_seconds=settings.eligibility_cache_duration))
    finally:
        await dispose_redis()


@cache_app.command("stats")
def stats() -> None:
    """Show eligibility cache statistics."""
    result = asyncio.run(_with_cache(lambda cache: cache.get_stats()))
    typer.echo(f"Eligibility entries: {result.eligibility_entries}")
    typer.echo(f"Total DB size:       {result.total_db_size if result.total_db_size is not None else 'unavailable'}")


@cache_app.command("clear")
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every cached eligibility result."""
    if not yes:
        typer.confirm("Clear all cached eligibility results?", abort=True)
    deleted = asyncio.run(_with_cache(lambda cache: cache.clear_all()))
    typer.echo(f"Deleted {deleted} entries")


@cache_app.command("evict")
def evict(
    key: str = typer.Argument(..., help="Cache key (street:city:state:zip, lowercased)"),
) -> None:
    """Evict one cached eligibility result."""
    if asyncio.run(_with_cache(lambda cache: cache.evict(key))):
        typer.echo(f"Evicted {key}")
    else:
        typer.echo(f"No cache entry for {key}", err=True)
        raise typer.Exit(code=1)
