from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner.models import Base, TimestampMixin, UuidPrimaryKeyMixin
from planner.models.crew import CrewMember, CrewRole
from planner.models.equipment import Equipment


class Project(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Project container.

    Attributes:
        name: Project name shown in drill-down rows.
        owner_id: Owner scope used to filter the planner.
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)


class EventType(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Event type with a display colour, e.g. "Show" or "Rig"."""

    __tablename__ = "event_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)


class ProjectEvent(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """A single-day event of a project. Bookings hang off events.

    Events with status ``cancelled`` keep their bookings but do not claim
    any resources.
    """

    __tablename__ = "project_events"

    project_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(Project.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project: Mapped[Project] = relationship(Project)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    event_type_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey(EventType.id), nullable=True
    )
    event_type: Mapped[EventType | None] = relationship(EventType)


class ProjectEventEquipment(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Quantity of an equipment item booked for an event."""

    __tablename__ = "project_event_equipment"

    event_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(ProjectEvent.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    equipment_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(Equipment.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)


class ProjectEventRole(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Crew role slot of an event, optionally filled by a crew member."""

    __tablename__ = "project_event_roles"

    event_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey(ProjectEvent.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    crew_member_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey(CrewMember.id), nullable=True, index=True
    )
    role_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey(CrewRole.id), nullable=True
    )
    daily_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
