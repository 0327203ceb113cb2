"""Address eligibility API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from loguru import logger

from eligibility_api.core.dependencies import get_eligibility_service
from eligibility_api.schemas.eligibility import (
    AddressEligibilityRequest,
    AddressEligibilityResponse,
    AddressTextRequest,
    AddressTextResponse,
    FormattedAddress,
)
from eligibility_api.services.eligibility_service import AddressEligibilityService

address_router = APIRouter(prefix="/address", tags=["address"])

MESSAGE_ELIGIBLE = "address_eligible"
MESSAGE_NOT_ELIGIBLE = "address not eligible"
MESSAGE_NOT_FOUND = "address not found"
MESSAGE_MISSING = "address missing"


async def _check_text(service: AddressEligibilityService, address: str | None) -> AddressTextResponse:
    if address is None or not address.strip():
        return AddressTextResponse(message=MESSAGE_MISSING)

    logger.info("Checking eligibility for free-text address")
    response = await service.check_address_text(address)
    if response is None:
        return AddressTextResponse(message=MESSAGE_NOT_FOUND)
    if not response.eligible:
        return AddressTextResponse(message=MESSAGE_NOT_ELIGIBLE)

    details = response.address
    return AddressTextResponse(
        message=MESSAGE_ELIGIBLE,
        formatted_address=FormattedAddress(
            street=details.street_address if details else None,
            city=details.city if details else None,
            state=details.state if details else None,
            zip=details.zip_code if details else None,
            county=(details.county if details else None) or "",
            country=details.country if details else None,
        ),
    )


@address_router.post(
    "/eligibility_check",
    response_model=AddressTextResponse,
    response_model_exclude_none=True,
)
async def eligibility_check(
    body: AddressTextRequest,
    service: AddressEligibilityService = Depends(get_eligibility_service),  # noqa: B008
) -> AddressTextResponse:
    """Check a free-text address against curated data and eligible regions."""
    return await _check_text(service, body.address)


@address_router.post(
    "/eligible",
    response_model=AddressTextResponse,
    response_model_exclude_none=True,
)
async def eligible(
    address: str | None = Query(default=None, max_length=500, description="Free-text address"),
    service: AddressEligibilityService = Depends(get_eligibility_service),  # noqa: B008
) -> AddressTextResponse:
    """Query-parameter variant of the free-text check."""
    return await _check_text(service, address)


@address_router.post(
    "/check",
    response_model=AddressEligibilityResponse,
    response_model_exclude_none=True,
)
async def check_eligibility(
    request: AddressEligibilityRequest,
    service: AddressEligibilityService = Depends(get_eligibility_service),  # noqa: B008
) -> AddressEligibilityResponse:
    """Check a structured address against eligibility zones."""
    logger.info(f"Checking eligibility for structured request in {request.city}, {request.state} {request.zip_code}")
    try:
        return await service.check_eligibility(request)
    except ValueError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during eligibility check: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during eligibility check.",
        ) from e


@address_router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    return "OK"
