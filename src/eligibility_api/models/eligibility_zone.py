"""Eligibility zone ORM models.

A zone row carries its type, priority and optional coordinate bounds; zip,
city and state criteria live in one child table each.
"""

import uuid

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, Index, Integer, String, Uuid, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eligibility_api.lib.rules import Zone, ZoneType
from eligibility_api.models.base import Base, TimestampMixin, UUIDMixin

_ZONE_TYPES = ", ".join(f"'{t.value}'" for t in ZoneType)


class EligibilityZone(Base, UUIDMixin, TimestampMixin):
    """Named eligibility zone."""

    __tablename__ = "eligibility_zones"

    zone_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    zone_type: Mapped[str] = mapped_column(String(50), nullable=False)
    min_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    min_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # Relationships
    zip_code_entries: Mapped[list["ZoneZipCode"]] = relationship(
        back_populates="zone", cascade="all, delete-orphan", lazy="selectin"
    )
    city_entries: Mapped[list["ZoneCity"]] = relationship(
        back_populates="zone", cascade="all, delete-orphan", lazy="selectin"
    )
    state_entries: Mapped[list["ZoneState"]] = relationship(
        back_populates="zone", cascade="all, delete-orphan", lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint(f"zone_type IN ({_ZONE_TYPES})", name="ck_eligibility_zone_type"),
        Index("ix_eligibility_zones_zone_type", "zone_type"),
        Index("ix_eligibility_zones_is_active", "is_active"),
    )

    @property
    def zip_codes(self) -> list[str]:
        return sorted(e.zip_code for e in self.zip_code_entries)

    @property
    def cities(self) -> list[str]:
        return sorted(e.city for e in self.city_entries)

    @property
    def states(self) -> list[str]:
        return sorted(e.state for e in self.state_entries)

    def to_zone(self) -> Zone:
        """Convert the row into an immutable domain zone."""
        return Zone(
            id=self.id,
            name=self.zone_name,
            zone_type=ZoneType(self.zone_type),
            priority=self.priority,
            zip_codes=frozenset(self.zip_codes),
            cities=frozenset(self.cities),
            states=frozenset(self.states),
            min_latitude=self.min_latitude,
            max_latitude=self.max_latitude,
            min_longitude=self.min_longitude,
            max_longitude=self.max_longitude,
            is_active=self.is_active,
        )


class ZoneZipCode(Base):
    """ZIP code criterion of a zone."""

    __tablename__ = "zone_zip_codes"

    zone_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("eligibility_zones.id", ondelete="CASCADE"), primary_key=True
    )
    zip_code: Mapped[str] = mapped_column(String(10), primary_key=True)

    zone: Mapped["EligibilityZone"] = relationship(back_populates="zip_code_entries")

    __table_args__ = (Index("ix_zone_zip_codes_zip_code", "zip_code"),)


class ZoneCity(Base):
    """City criterion of a zone."""

    __tablename__ = "zone_cities"

    zone_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("eligibility_zones.id", ondelete="CASCADE"), primary_key=True
    )
    city: Mapped[str] = mapped_column(String(100), primary_key=True)

    zone: Mapped["EligibilityZone"] = relationship(back_populates="city_entries")

    __table_args__ = (Index("ix_zone_cities_city", "city"),)


class ZoneState(Base):
    """State criterion of a zone."""

    __tablename__ = "zone_states"

    zone_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("eligibility_zones.id", ondelete="CASCADE"), primary_key=True
    )
    state: Mapped[str] = mapped_column(String(50), primary_key=True)

    zone: Mapped["EligibilityZone"] = relationship(back_populates="state_entries")

    __table_args__ = (Index("ix_zone_states_state", "state"),)
