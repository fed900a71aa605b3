"""Event status plus subrental and repair orders

Revision ID: 20261019_03_event_status_stock
Revises: 20261019_02_expansion_states
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_03_event_status_stock"
down_revision = "20261019_02_expansion_states"
branch_labels = None
depends_on = None


def _uuid() -> sa.Uuid:
    return sa.Uuid(as_uuid=False)


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def _order_items(table: str, order_table: str) -> None:
    op.create_table(
        table,
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "order_id",
            _uuid(),
            sa.ForeignKey(f"{order_table}.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "equipment_id",
            _uuid(),
            sa.ForeignKey("equipment.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index(f"ix_{table}_order_id", table, ["order_id"])
    op.create_index(f"ix_{table}_equipment_id", table, ["equipment_id"])


def upgrade() -> None:
    op.add_column(
        "project_events", sa.Column("status", sa.String(length=32), nullable=True)
    )

    op.create_table(
        "subrental_orders",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("supplier_name", sa.String(length=255), nullable=True),
        sa.Column(
            "status", sa.String(length=32), nullable=False, server_default="draft"
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
    )
    _order_items("subrental_order_items", "subrental_orders")

    op.create_table(
        "repair_orders",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "status", sa.String(length=32), nullable=False, server_default="in_repair"
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("estimated_end_date", sa.Date(), nullable=True),
        sa.Column("actual_end_date", sa.Date(), nullable=True),
        *_timestamps(),
    )
    _order_items("repair_order_items", "repair_orders")


def downgrade() -> None:
    for table in ("repair_order_items", "subrental_order_items"):
        op.drop_index(f"ix_{table}_equipment_id", table_name=table)
        op.drop_index(f"ix_{table}_order_id", table_name=table)
        op.drop_table(table)
    op.drop_table("repair_orders")
    op.drop_table("subrental_orders")
    op.drop_column("project_events", "status")
