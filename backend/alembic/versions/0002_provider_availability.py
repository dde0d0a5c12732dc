"""Add provider availability slots.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "availability_slots",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "provider_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "day_of_week BETWEEN 0 AND 6", name="ck_availability_slots_day_range"
        ),
        sa.CheckConstraint("end_time > start_time", name="ck_availability_slots_order"),
    )
    op.create_index(
        "ix_availability_slots_provider_id", "availability_slots", ["provider_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_availability_slots_provider_id", table_name="availability_slots")
    op.drop_table("availability_slots")
