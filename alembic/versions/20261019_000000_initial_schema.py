"""Initial schema for NT Savitarna

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

Creates the portal tables:
- uzkl_ivertink1P: valuation orders
- app_users: client and administrator accounts
- app_valuators: valuators referenced by order ``priskirta`` codes

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # Create uzkl_ivertink1P table
    op.create_table(
        "uzkl_ivertink1P",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token", sa.String(64), nullable=True),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(32), nullable=True),
        sa.Column("contact_agree_to_newsletter", sa.Boolean(), nullable=True),
        sa.Column("address_municipality", sa.String(255), nullable=True),
        sa.Column("address_city", sa.String(255), nullable=True),
        sa.Column("address_street", sa.String(255), nullable=True),
        sa.Column("address_house_number", sa.String(32), nullable=True),
        sa.Column("address_latitude", sa.Float(), nullable=True),
        sa.Column("address_longitude", sa.Float(), nullable=True),
        sa.Column("main_property", sa.String(255), nullable=True),
        sa.Column("main_property_type", sa.String(255), nullable=True),
        sa.Column("main_valuation_purpose", sa.String(255), nullable=True),
        sa.Column("details_indoor_area", sa.Integer(), nullable=True),
        sa.Column("details_land_area", sa.Integer(), nullable=True),
        sa.Column("details_year_built", sa.Integer(), nullable=True),
        sa.Column("details_rooms", sa.Integer(), nullable=True),
        sa.Column("service_type", sa.String(16), nullable=True),
        sa.Column("service_price", sa.Float(), nullable=True),
        sa.Column("is_enough_data_for_ai", sa.Boolean(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("price_from", sa.Float(), nullable=True),
        sa.Column("price_to", sa.Float(), nullable=True),
        sa.Column("rc_filename", sa.String(255), nullable=True),
        sa.Column("rc_saskaita", sa.String(255), nullable=True),
        sa.Column("status", sa.String(16), nullable=True),
        sa.Column("priskirta", sa.String(32), nullable=True),
        sa.Column("priskirta_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_uzkl_ivertink1P_token", "token"),
        sa.Index("ix_uzkl_ivertink1P_contact_email", "contact_email"),
        sa.Index("ix_uzkl_ivertink1P_status", "status"),
        sa.Index("ix_uzkl_ivertink1P_priskirta", "priskirta"),
        sa.Index("ix_uzkl_ivertink1P_created_at", "created_at"),
    )

    # Create app_users table
    op.create_table(
        "app_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="client"),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_app_users_email", "email", unique=True),
    )

    # Create app_valuators table
    op.create_table(
        "app_valuators",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_app_valuators_code", "code", unique=True),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("app_valuators")
    op.drop_table("app_users")
    op.drop_table("uzkl_ivertink1P")
