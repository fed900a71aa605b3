"""Load subrentals and repairs that change equipment stock for a period."""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from planner.core.logging import logger
from planner.models.stock import (
    RepairOrder,
    RepairOrderItem,
    SubrentalOrder,
    SubrentalOrderItem,
)
from planner.schemas.resource import AdjustmentKind, StockAdjustment
from planner.schemas.timeline import DateWindow

ACTIVE_SUBRENTAL_STATUSES = ("confirmed", "delivered")
ACTIVE_REPAIR_STATUS = "in_repair"


def adjustments_from_rows(
    rows: Iterable[Any], kind: AdjustmentKind
) -> list[StockAdjustment]:
    """Convert order item rows into stock adjustments.

    Rows with a missing or non-positive quantity are skipped with a warning.
    """
    adjustments: list[StockAdjustment] = []
    for row in rows:
        quantity = row.quantity or 0
        if quantity <= 0:
            logger.warning(
                "Skipping %s for %s: quantity %s is not positive",
                kind,
                row.resource_id,
                row.quantity,
            )
            continue
        adjustments.append(
            StockAdjustment(
                resource_id=str(row.resource_id),
                kind=kind,
                quantity=quantity,
                start=row.start_date,
                end=row.end_date,
                source=str(row.order_id),
            )
        )
    return adjustments


async def load_stock_adjustments(
    db: AsyncSession, window: DateWindow
) -> list[StockAdjustment]:
    """Load subrentals and repairs overlapping ``window``.

    Args:
        db: Async SQLAlchemy session.
        window: Inclusive date window the adjustments must overlap.

    Returns:
        Subrental additions followed by repair reductions.
    """
    subrentals_stmt = (
        select(
            SubrentalOrderItem.equipment_id.label("resource_id"),
            SubrentalOrderItem.quantity,
            SubrentalOrder.id.label("order_id"),
            SubrentalOrder.start_date,
            SubrentalOrder.end_date,
        )
        .join(SubrentalOrder, SubrentalOrder.id == SubrentalOrderItem.order_id)
        .where(
            and_(
                SubrentalOrder.status.in_(ACTIVE_SUBRENTAL_STATUSES),
                SubrentalOrder.start_date <= window.end,
                SubrentalOrder.end_date >= window.start,
            )
        )
    )
    subrentals = (await db.execute(subrentals_stmt)).all()

    repair_end = func.coalesce(
        RepairOrder.actual_end_date, RepairOrder.estimated_end_date
    )
    repairs_stmt = (
        select(
            RepairOrderItem.equipment_id.label("resource_id"),
            RepairOrderItem.quantity,
            RepairOrder.id.label("order_id"),
            RepairOrder.start_date,
            repair_end.label("end_date"),
        )
        .join(RepairOrder, RepairOrder.id == RepairOrderItem.order_id)
        .where(
            and_(
                RepairOrder.status == ACTIVE_REPAIR_STATUS,
                RepairOrder.start_date <= window.end,
                or_(repair_end.is_(None), repair_end >= window.start),
            )
        )
    )
    repairs = (await db.execute(repairs_stmt)).all()

    return adjustments_from_rows(
        subrentals, AdjustmentKind.SUBRENTAL
    ) + adjustments_from_rows(repairs, AdjustmentKind.REPAIR)
