"""Load booking ledgers for the planner from project events.

Each row of an allocation table becomes one :class:`BookingRecord` for the
day of its event. Cancelled events claim nothing. Rows that cannot be booked
(no crew member, non-positive quantity) are dropped here so the engine only
sees valid records.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from planner.core.logging import logger
from planner.models.crew import CrewRole
from planner.models.project import (
    EventType,
    Project,
    ProjectEvent,
    ProjectEventEquipment,
    ProjectEventRole,
)
from planner.schemas.resource import BookingRecord, ResourceKind
from planner.schemas.timeline import DateWindow

UNKNOWN_PROJECT = "Unknown Project"
UNKNOWN_EVENT = "Unknown Event"
DEFAULT_EVENT_COLOR = "#6B7280"
CANCELLED_STATUS = "cancelled"


def _event_filters(window: DateWindow, owner_id: str | None) -> list[Any]:
    filters: list[Any] = [
        ProjectEvent.date >= window.start,
        ProjectEvent.date <= window.end,
        or_(
            ProjectEvent.status.is_(None),
            ProjectEvent.status != CANCELLED_STATUS,
        ),
    ]
    if owner_id is not None:
        filters.append(Project.owner_id == owner_id)
    return filters


def _booking_fields(row: Any) -> dict[str, Any]:
    return {
        "date": row.date,
        "source_project": row.project_name or UNKNOWN_PROJECT,
        "source_event": row.event_name or UNKNOWN_EVENT,
        "event_type": row.event_type,
        "event_type_color": row.event_type_color or DEFAULT_EVENT_COLOR,
        "location": row.location,
    }


def equipment_bookings_from_rows(rows: Iterable[Any]) -> list[BookingRecord]:
    """Convert equipment allocation rows into booking records.

    Rows with a missing or non-positive quantity are skipped with a warning.
    """
    bookings: list[BookingRecord] = []
    for row in rows:
        quantity = row.quantity or 0
        if quantity <= 0:
            logger.warning(
                "Skipping equipment booking for %s on %s: quantity %s is not positive",
                row.resource_id,
                row.date,
                row.quantity,
            )
            continue
        bookings.append(
            BookingRecord(
                resource_id=str(row.resource_id),
                quantity=quantity,
                kind=ResourceKind.EQUIPMENT,
                **_booking_fields(row),
            )
        )
    return bookings


def crew_bookings_from_rows(rows: Iterable[Any]) -> list[BookingRecord]:
    """Convert crew role rows into booking records; unassigned roles are skipped."""
    bookings: list[BookingRecord] = []
    for row in rows:
        if row.resource_id is None:
            continue
        bookings.append(
            BookingRecord(
                resource_id=str(row.resource_id),
                kind=ResourceKind.CREW,
                role=row.role_name,
                **_booking_fields(row),
            )
        )
    return bookings


async def load_equipment_ledger(
    db: AsyncSession, window: DateWindow, owner_id: str | None = None
) -> list[BookingRecord]:
    """Load equipment bookings of all events inside ``window``.

    Args:
        db: Async SQLAlchemy session.
        window: Inclusive date window of events to load.
        owner_id: Optional owner scope; only projects of this owner count.

    Returns:
        Booking records ordered by date.
    """
    stmt = (
        select(
            ProjectEventEquipment.equipment_id.label("resource_id"),
            ProjectEventEquipment.quantity,
            ProjectEvent.date,
            ProjectEvent.name.label("event_name"),
            ProjectEvent.location,
            Project.name.label("project_name"),
            EventType.name.label("event_type"),
            EventType.color.label("event_type_color"),
        )
        .join(ProjectEvent, ProjectEvent.id == ProjectEventEquipment.event_id)
        .join(Project, Project.id == ProjectEvent.project_id)
        .outerjoin(EventType, EventType.id == ProjectEvent.event_type_id)
        .where(and_(*_event_filters(window, owner_id)))
        .order_by(ProjectEvent.date)
    )
    rows = (await db.execute(stmt)).all()
    return equipment_bookings_from_rows(rows)


async def load_crew_ledger(
    db: AsyncSession, window: DateWindow, owner_id: str | None = None
) -> list[BookingRecord]:
    """Load crew assignments of all events inside ``window``.

    Args:
        db: Async SQLAlchemy session.
        window: Inclusive date window of events to load.
        owner_id: Optional owner scope; only projects of this owner count.

    Returns:
        Booking records ordered by date, one per assigned role.
    """
    stmt = (
        select(
            ProjectEventRole.crew_member_id.label("resource_id"),
            CrewRole.name.label("role_name"),
            ProjectEvent.date,
            ProjectEvent.name.label("event_name"),
            ProjectEvent.location,
            Project.name.label("project_name"),
            EventType.name.label("event_type"),
            EventType.color.label("event_type_color"),
        )
        .join(ProjectEvent, ProjectEvent.id == ProjectEventRole.event_id)
        .join(Project, Project.id == ProjectEvent.project_id)
        .outerjoin(CrewRole, CrewRole.id == ProjectEventRole.role_id)
        .outerjoin(EventType, EventType.id == ProjectEvent.event_type_id)
        .where(
            and_(
                ProjectEventRole.crew_member_id.is_not(None),
                *_event_filters(window, owner_id),
            )
        )
        .order_by(ProjectEvent.date)
    )
    rows = (await db.execute(stmt)).all()
    return crew_bookings_from_rows(rows)


async def load_ledger(
    db: AsyncSession,
    kind: ResourceKind,
    window: DateWindow,
    owner_id: str | None = None,
) -> list[BookingRecord]:
    if kind == ResourceKind.CREW:
        return await load_crew_ledger(db, window, owner_id)
    return await load_equipment_ledger(db, window, owner_id)
