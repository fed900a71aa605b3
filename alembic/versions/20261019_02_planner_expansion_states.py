"""Persist planner expansion state per view

Revision ID: 20261019_02_expansion_states
Revises: 20261019_01_initial
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_02_expansion_states"
down_revision = "20261019_01_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "planner_expansion_states",
        sa.Column("storage_key", sa.String(length=128), primary_key=True),
        sa.Column("groups", sa.JSON(), nullable=False),
        sa.Column("resources", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("planner_expansion_states")
