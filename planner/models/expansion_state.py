from __future__ import annotations

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from planner.models import Base, TimestampMixin


class ExpansionStateRecord(TimestampMixin, Base):
    """Persisted expansion state of one planner view.

    Attributes:
        storage_key: View identifier, e.g. ``equipmentPlannerExpandedGroups``.
        groups: Expanded group keys (``"Main"`` or ``"Main/Sub"``).
        resources: Expanded resource ids.
    """

    __tablename__ = "planner_expansion_states"

    storage_key: Mapped[str] = mapped_column(String(128), primary_key=True)
    groups: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    resources: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
