"""Zone service — eligibility zone membership queries and administration."""

from pathlib import Path

import yaml
from loguru import logger
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.lib.rules import Zone
from eligibility_api.models.eligibility_zone import EligibilityZone, ZoneCity, ZoneState, ZoneZipCode
from eligibility_api.schemas.zone import ZoneCreateRequest


def _active_zones() -> Select[tuple[EligibilityZone]]:
    return (
        select(EligibilityZone)
        .where(EligibilityZone.is_active.is_(True))
        .order_by(EligibilityZone.priority.desc(), EligibilityZone.zone_name)
    )


async def find_active_zones_by_zip_code(session: AsyncSession, zip_code: str | None) -> list[Zone]:
    """Return active zones whose ZIP set contains ``zip_code``."""
    if not zip_code:
        return []
    stmt = _active_zones().where(EligibilityZone.zip_code_entries.any(ZoneZipCode.zip_code == zip_code))
    result = await session.execute(stmt)
    return [row.to_zone() for row in result.scalars().all()]


async def find_active_zones_by_city_and_state(
    session: AsyncSession,
    city: str | None,
    state: str | None,
) -> list[Zone]:
    """Return active zones whose city set contains ``city`` and state set contains ``state``."""
    if not city or not state:
        return []
    stmt = _active_zones().where(
        EligibilityZone.city_entries.any(ZoneCity.city == city),
        EligibilityZone.state_entries.any(ZoneState.state == state),
    )
    result = await session.execute(stmt)
    return [row.to_zone() for row in result.scalars().all()]


async def find_active_zones_by_coordinates(session: AsyncSession, latitude: float, longitude: float) -> list[Zone]:
    """Return active zones whose bounds contain the point (inclusive).

    Zones without bounds never match.
    """
    stmt = _active_zones().where(
        EligibilityZone.min_latitude <= latitude,
        EligibilityZone.max_latitude >= latitude,
        EligibilityZone.min_longitude <= longitude,
        EligibilityZone.max_longitude >= longitude,
    )
    result = await session.execute(stmt)
    return [row.to_zone() for row in result.scalars().all()]


async def list_active_zones(session: AsyncSession) -> list[EligibilityZone]:
    """Return active zone rows, highest priority first."""
    result = await session.execute(_active_zones())
    return list(result.scalars().all())


async def find_all_active_ordered_by_priority(session: AsyncSession) -> list[Zone]:
    """Return all active zones, highest priority first."""
    return [row.to_zone() for row in await list_active_zones(session)]


async def get_zone_by_name(session: AsyncSession, zone_name: str) -> EligibilityZone | None:
    result = await session.execute(select(EligibilityZone).where(EligibilityZone.zone_name == zone_name))
    return result.scalar_one_or_none()


def _sync_entries(entries: list, values: list[str], attr: str, factory: type) -> None:
    wanted = list(dict.fromkeys(v.strip() for v in values if v and v.strip()))
    for entry in [e for e in entries if getattr(e, attr) not in wanted]:
        entries.remove(entry)
    existing = {getattr(e, attr) for e in entries}
    for value in wanted:
        if value not in existing:
            entries.append(factory(**{attr: value}))


async def upsert_zone(session: AsyncSession, data: ZoneCreateRequest) -> EligibilityZone:
    """Create a zone or update the one with the same name.

    Criteria sets are reconciled entry by entry so unchanged members keep
    their rows.

    Args:
        session: Database session.
        data: Zone definition.

    Returns:
        The created or updated zone.
    """
    zone = await get_zone_by_name(session, data.zone_name)
    if zone is None:
        zone = EligibilityZone(zone_name=data.zone_name, zip_code_entries=[], city_entries=[], state_entries=[])
        session.add(zone)
        logger.info(f"Creating eligibility zone '{data.zone_name}'")
    else:
        logger.info(f"Updating eligibility zone '{data.zone_name}'")

    zone.zone_type = data.zone_type.value
    zone.priority = data.priority
    zone.is_active = data.is_active
    zone.min_latitude = data.min_latitude
    zone.max_latitude = data.max_latitude
    zone.min_longitude = data.min_longitude
    zone.max_longitude = data.max_longitude

    _sync_entries(zone.zip_code_entries, data.zip_codes, "zip_code", ZoneZipCode)
    _sync_entries(zone.city_entries, data.cities, "city", ZoneCity)
    _sync_entries(zone.state_entries, data.states, "state", ZoneState)

    await session.flush()
    return zone


def read_zone_file(path: str | Path) -> list[ZoneCreateRequest]:
    """Parse zone definitions from a YAML file.

    The file holds a ``zones`` list; each item follows ZoneCreateRequest.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is malformed or a zone is invalid.
    """
    with Path(path).open(encoding="utf-8") as f:
        document = yaml.safe_load(f) or {}
    items = document.get("zones") if isinstance(document, dict) else None
    if not isinstance(items, list):
        msg = "Zone file must contain a 'zones' list"
        raise ValueError(msg)
    return [ZoneCreateRequest.model_validate(item) for item in items]


async def seed_zones(session: AsyncSession, zones: list[ZoneCreateRequest]) -> list[EligibilityZone]:
    """Upsert a batch of zones and commit."""
    rows = [await upsert_zone(session, zone) for zone in zones]
    await session.commit()
    logger.info(f"Seeded {len(rows)} eligibility zones")
    return rows
