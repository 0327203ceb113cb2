"""Address model — checked addresses with their persisted eligibility verdict."""

from sqlalchemy import Boolean, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eligibility_api.models.base import Base, TimestampMixin, UUIDMixin


class Address(Base, UUIDMixin, TimestampMixin):
    """Address record; ``is_eligible`` stays NULL until the address is evaluated."""

    __tablename__ = "addresses"

    street_address: Mapped[str] = mapped_column(String(255), nullable=False)
    street_address_2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_eligible: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    eligibility_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("ix_addresses_zip_code", "zip_code"),
        Index("ix_addresses_city_state", "city", "state"),
        Index("ix_addresses_coordinates", "latitude", "longitude"),
        Index("ix_addresses_identity", "street_address", "city", "state", "zip_code"),
    )
