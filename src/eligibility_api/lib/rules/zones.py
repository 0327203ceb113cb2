"""Eligibility zone domain types."""

import enum
import uuid
from dataclasses import dataclass, field


class ZoneType(enum.StrEnum):
    """Criterion a zone is defined by."""

    ZIP_CODE = "ZIP_CODE"
    CITY = "CITY"
    STATE = "STATE"
    COORDINATES = "COORDINATES"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True, eq=False)
class Zone:
    """A named, typed geographic criterion set.

    Zones compare by identity; two zones loaded from the same row are
    recognised as duplicates through ``id``.
    """

    name: str
    zone_type: ZoneType
    priority: int = 0
    zip_codes: frozenset[str] = field(default_factory=frozenset)
    cities: frozenset[str] = field(default_factory=frozenset)
    states: frozenset[str] = field(default_factory=frozenset)
    min_latitude: float | None = None
    max_latitude: float | None = None
    min_longitude: float | None = None
    max_longitude: float | None = None
    is_active: bool = True
    id: uuid.UUID | None = None

    @property
    def has_bounds(self) -> bool:
        return None not in (self.min_latitude, self.max_latitude, self.min_longitude, self.max_longitude)

    def contains_point(self, latitude: float, longitude: float) -> bool:
        """Check inclusive rectangular containment. A zone without bounds contains nothing."""
        if not self.has_bounds:
            return False
        return (
            self.min_latitude <= latitude <= self.max_latitude  # type: ignore[operator]
            and self.min_longitude <= longitude <= self.max_longitude  # type: ignore[operator]
        )
