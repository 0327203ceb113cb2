"""Address service — persisted addresses and their eligibility verdicts."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.lib.rules import EligibilityResult
from eligibility_api.models.address import Address
from eligibility_api.schemas.eligibility import AddressEligibilityRequest


async def find_existing_address(
    session: AsyncSession,
    street_address: str,
    city: str,
    state: str,
    zip_code: str,
) -> Address | None:
    """Look up an address by its exact street, city, state and ZIP.

    Args:
        session: Database session.
        street_address: Street line.
        city: City name.
        state: State name or abbreviation.
        zip_code: ZIP or ZIP+4.

    Returns:
        The first matching Address or None.
    """
    result = await session.execute(
        select(Address)
        .where(
            Address.street_address == street_address,
            Address.city == city,
            Address.state == state,
            Address.zip_code == zip_code,
        )
        .order_by(Address.created_at)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def save_or_update_address(
    session: AsyncSession,
    request: AddressEligibilityRequest,
    result: EligibilityResult,
) -> Address:
    """Attach an evaluation verdict to the address, creating it if needed.

    Coordinates are taken from the request, overwriting any stored values.

    Args:
        session: Database session.
        request: The checked address.
        result: Evaluation outcome to persist.

    Returns:
        The saved Address row.
    """
    address = await find_existing_address(
        session, request.street_address, request.city, request.state, request.zip_code
    )
    if address is None:
        address = Address(
            street_address=request.street_address,
            street_address_2=request.street_address_2,
            city=request.city,
            state=request.state,
            zip_code=request.zip_code,
            country=request.country,
        )
        session.add(address)

    address.is_eligible = result.eligible
    address.eligibility_reason = result.reason
    address.latitude = request.latitude
    address.longitude = request.longitude

    await session.commit()
    logger.debug(f"Saved eligibility verdict for address {address.id}: {result.eligible}")
    return address
