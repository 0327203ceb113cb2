"""Create addresses and eligibility zone tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create addresses, eligibility_zones and the zone criteria tables."""
    op.create_table(
        "addresses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("street_address", sa.String(255), nullable=False),
        sa.Column("street_address_2", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(50), nullable=False),
        sa.Column("zip_code", sa.String(10), nullable=False),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("is_eligible", sa.Boolean(), nullable=True),
        sa.Column("eligibility_reason", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_addresses_zip_code", "addresses", ["zip_code"])
    op.create_index("ix_addresses_city_state", "addresses", ["city", "state"])
    op.create_index("ix_addresses_coordinates", "addresses", ["latitude", "longitude"])
    op.create_index("ix_addresses_identity", "addresses", ["street_address", "city", "state", "zip_code"])

    op.create_table(
        "eligibility_zones",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("zone_name", sa.String(255), nullable=False),
        sa.Column("zone_type", sa.String(50), nullable=False),
        sa.Column("min_latitude", sa.Float(), nullable=True),
        sa.Column("max_latitude", sa.Float(), nullable=True),
        sa.Column("min_longitude", sa.Float(), nullable=True),
        sa.Column("max_longitude", sa.Float(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("zone_name"),
        sa.CheckConstraint(
            "zone_type IN ('ZIP_CODE', 'CITY', 'STATE', 'COORDINATES', 'CUSTOM')",
            name="ck_eligibility_zone_type",
        ),
    )
    op.create_index("ix_eligibility_zones_zone_type", "eligibility_zones", ["zone_type"])
    op.create_index("ix_eligibility_zones_is_active", "eligibility_zones", ["is_active"])

    for table, column, length in (
        ("zone_zip_codes", "zip_code", 10),
        ("zone_cities", "city", 100),
        ("zone_states", "state", 50),
    ):
        op.create_table(
            table,
            sa.Column("zone_id", sa.Uuid(), nullable=False),
            sa.Column(column, sa.String(length), nullable=False),
            sa.ForeignKeyConstraint(["zone_id"], ["eligibility_zones.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("zone_id", column),
        )
        op.create_index(f"ix_{table}_{column}", table, [column])


def downgrade() -> None:
    """Drop the zone criteria tables, eligibility_zones and addresses."""
    op.drop_table("zone_states")
    op.drop_table("zone_cities")
    op.drop_table("zone_zip_codes")
    op.drop_table("eligibility_zones")
    op.drop_table("addresses")
