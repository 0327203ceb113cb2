"""Pydantic v2 schemas for address eligibility checks."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

ZIP_CODE_PATTERN = r"^\d{5}(-\d{4})?$"


class AddressEligibilityRequest(BaseModel):
    """Structured address to check for eligibility."""

    street_address: str = Field(..., min_length=1, max_length=255)
    street_address_2: str | None = Field(default=None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., pattern=ZIP_CODE_PATTERN, description="5-digit ZIP or ZIP+4")
    country: str = Field(default="USA", max_length=100)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    check_coordinates: bool = Field(default=False, description="Also match coordinate-bounded zones")
    include_reason: bool = Field(default=True, description="Include the reason text in the response")


class AddressDetails(BaseModel):
    """Address as echoed back with the verdict."""

    model_config = {"from_attributes": True}

    street_address: str | None = None
    street_address_2: str | None = None
    city: str | None = None
    county: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    formatted_address: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class AddressEligibilityResponse(BaseModel):
    """Eligibility verdict for an address.

    Null fields are omitted on the wire and in the result cache.
    """

    eligible: bool
    reason: str | None = None
    address: AddressDetails | None = None
    matched_zones: list[str] = Field(default_factory=list)
    confidence_score: float | None = None
    checked_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    cache_hit: bool = False
    processing_time_ms: int | None = None


class AddressTextRequest(BaseModel):
    """Free-text address check body."""

    address: str | None = None


class FormattedAddress(BaseModel):
    """Resolved address parts returned by the free-text check."""

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    county: str = ""
    country: str | None = None


class AddressTextResponse(BaseModel):
    """Free-text check outcome.

    ``message`` is one of ``address_eligible``, ``address not eligible``,
    ``address not found`` or ``address missing``.
    """

    message: str
    formatted_address: FormattedAddress | None = None
