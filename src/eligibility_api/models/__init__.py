"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from eligibility_api.models.address import Address
from eligibility_api.models.base import Base
from eligibility_api.models.eligibility_zone import EligibilityZone, ZoneCity, ZoneState, ZoneZipCode

__all__ = [
    "Address",
    "Base",
    "EligibilityZone",
    "ZoneCity",
    "ZoneState",
    "ZoneZipCode",
]
