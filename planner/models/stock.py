from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner.models import Base, TimestampMixin, UuidPrimaryKeyMixin
from planner.models.equipment import Equipment


class SubrentalOrder(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Equipment rented in from a supplier for a period.

    Only ``confirmed`` and ``delivered`` orders add stock.
    """

    __tablename__ = "subrental_orders"

    supplier_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft")
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)


class SubrentalOrderItem(UuidPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "subrental_order_items"

    order_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(SubrentalOrder.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order: Mapped[SubrentalOrder] = relationship(SubrentalOrder)
    equipment_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(Equipment.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)


class RepairOrder(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Equipment out for repair.

    Only ``in_repair`` orders take stock out, from ``start_date`` until the
    actual end date, else the estimated one, else indefinitely.
    """

    __tablename__ = "repair_orders"

    status: Mapped[str] = mapped_column(String(32), nullable=False, default="in_repair")
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    estimated_end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    actual_end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)


class RepairOrderItem(UuidPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "repair_order_items"

    order_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(RepairOrder.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order: Mapped[RepairOrder] = relationship(RepairOrder)
    equipment_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(Equipment.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
