"""Eligibility zone CLI commands for seeding and listing zones."""

import asyncio
from pathlib import Path  # noqa: TC003 - Typer needs Path at runtime

import typer

zones_app = typer.Typer()


@zones_app.command("seed")
def seed_zones(
    file: Path = typer.Argument(..., help="YAML file with a 'zones' list", exists=True, dir_okay=False),  # noqa: B008
) -> None:
    """Create or update eligibility zones from a YAML file."""
    asyncio.run(_seed_zones(file))


@zones_app.command("list")
def list_zones() -> None:
    """List active eligibility zones, highest priority first."""
    asyncio.run(_list_zones())


async def _seed_zones(file: Path) -> None:
    """Async implementation of zone seeding."""
    from eligibility_api.core.config import get_settings
    from eligibility_api.core.database import dispose_engine, init_engine_from_settings, session_scope
    from eligibility_api.services import zone_service

    try:
        zones = zone_service.read_zone_file(file)
    except ValueError as e:
        typer.echo(f"Invalid zone file: {e}", err=True)
        raise typer.Exit(code=1) from e

    init_engine_from_settings(get_settings())

    try:
        async with session_scope() as session:
            rows = await zone_service.seed_zones(session, zones)
            typer.echo(f"Seeded {len(rows)} zones from {file}")
    finally:
        await dispose_engine()


async def _list_zones() -> None:
    """Async implementation of zone listing."""
    from eligibility_api.core.config import get_settings
    from eligibility_api.core.database import dispose_engine, init_engine_from_settings, session_scope
    from eligibility_api.services import zone_service

    init_engine_from_settings(get_settings())

    try:
        async with session_scope() as session:
            zones = await zone_service.list_active_zones(session)
            if not zones:
                typer.echo("No active zones.")
                return
            for zone in zones:
                typer.echo(f"{zone.priority:>4}  {zone.zone_type:<12} {zone.zone_name}")
    finally:
        await dispose_engine()
