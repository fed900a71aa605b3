from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner.models import Base, TimestampMixin, UuidPrimaryKeyMixin


class CrewFolder(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Crew department, e.g. "Sonic City" or "Freelancers"."""

    __tablename__ = "crew_folders"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class CrewRole(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Role a crew member can fill, e.g. "FOH" or "Monitor"."""

    __tablename__ = "crew_roles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


crew_member_roles = Table(
    "crew_member_roles",
    Base.metadata,
    Column(
        "crew_member_id",
        Uuid(as_uuid=False),
        ForeignKey("crew_members.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Uuid(as_uuid=False),
        ForeignKey("crew_roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class CrewMember(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """A person that can be assigned to project events.

    Attributes:
        name: Display name.
        email: Optional contact email.
        phone: Optional contact phone number.
        folder_id: Department the member belongs to.
        roles: Roles the member can fill.
    """

    __tablename__ = "crew_members"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    folder_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey(CrewFolder.id), nullable=True, index=True
    )
    folder: Mapped[CrewFolder | None] = relationship(CrewFolder)
    roles: Mapped[list[CrewRole]] = relationship(
        CrewRole, secondary=crew_member_roles, order_by=CrewRole.name
    )
