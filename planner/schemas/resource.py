from __future__ import annotations

import datetime as dt
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class ResourceKind(StrEnum):
    """Kind of bookable resource shown in the planner."""

    EQUIPMENT = "equipment"
    CREW = "crew"


def _is_crew(data: Any) -> bool:
    return isinstance(data, dict) and data.get("kind") == ResourceKind.CREW


class GroupPath(BaseModel):
    """Folder position of a resource: main folder and optional subfolder.

    For equipment this is ``(folder, subfolder)``; for crew it is
    ``(department, primary role)``.
    """

    main_group: str
    sub_group: str | None = None

    model_config = {"frozen": True}

    @field_validator("main_group")
    @classmethod
    def _main_group_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("main_group must not be empty")
        return value

    @field_validator("sub_group")
    @classmethod
    def _blank_sub_group_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def key(self) -> str:
        """Expansion key, e.g. ``"Mixers"`` or ``"Mixers/Surface"``."""
        if self.sub_group is None:
            return self.main_group
        return f"{self.main_group}/{self.sub_group}"


class Resource(BaseModel):
    """A bookable equipment item or crew member.

    Attributes:
        id: Opaque identifier, unique within its kind.
        name: Display name.
        kind: Equipment or crew.
        capacity: Stock count for equipment. Always 1 for crew.
        group_path: Folder/department placement used for the tree view.
        roles: Crew role names; the first one is the primary role.
    """

    id: str = Field(min_length=1)
    name: str
    kind: ResourceKind = ResourceKind.EQUIPMENT
    capacity: int = Field(default=0, ge=0)
    group_path: GroupPath
    roles: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _crew_capacity_is_one(cls, data: Any) -> Any:
        if _is_crew(data):
            data = {**data, "capacity": 1}
        return data


class BookingRecord(BaseModel):
    """One project/event claim on a resource for a single calendar day.

    Quantities must be positive; crew assignments always count as 1.
    ``event_type_color`` is a display hint and is ignored by the engine.
    """

    resource_id: str = Field(min_length=1)
    date: dt.date
    quantity: int = Field(default=1, gt=0)
    source_project: str
    source_event: str
    kind: ResourceKind = ResourceKind.EQUIPMENT
    role: str | None = None
    event_type: str | None = None
    event_type_color: str | None = None
    location: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _crew_assignment_is_one_unit(cls, data: Any) -> Any:
        if _is_crew(data):
            data = {**data, "quantity": 1}
        return data

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_to_day(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        return value


class AdjustmentKind(StrEnum):
    """Direction of a temporary stock change."""

    SUBRENTAL = "subrental"
    REPAIR = "repair"


class StockAdjustment(BaseModel):
    """Temporary change to an equipment item's stock.

    Subrentals add units for their period; repairs take units out from
    ``start`` until ``end``. An open ``end`` means the change lasts until
    further notice.
    """

    resource_id: str = Field(min_length=1)
    kind: AdjustmentKind
    quantity: int = Field(gt=0)
    start: dt.date
    end: dt.date | None = None
    source: str | None = None

    model_config = {"frozen": True}

    def is_active(self, day: dt.date) -> bool:
        return self.start <= day and (self.end is None or day <= self.end)
