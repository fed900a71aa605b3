from __future__ import annotations

import datetime as dt
from typing import Iterator, Literal

from pydantic import BaseModel, model_validator

from planner.schemas.resource import ResourceKind
from planner.schemas.usage import DailyUsage, ProjectUsage, ResourceGroup


class DateWindow(BaseModel):
    """Inclusive range of calendar days."""

    start: dt.date
    end: dt.date

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _start_not_after_end(self) -> "DateWindow":
        if self.start > self.end:
            raise ValueError("window start must not be after window end")
        return self

    @property
    def day_count(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[dt.date]:
        day = self.start
        while day <= self.end:
            yield day
            day += dt.timedelta(days=1)

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end


WarningSeverity = Literal["critical", "warning", "none"]


class GroupWarning(BaseModel):
    """Conflict rollup for one folder or subfolder over a date window.

    Attributes:
        key: Group key (``"Main"`` or ``"Main/Sub"``).
        overbooked_count: Number of (resource, day) cells that are overbooked.
        fully_booked_count: Equipment cells where exactly all stock is used.
        affected_resource_ids: Resources with at least one overbooked cell.
        severity: Display severity derived from the counts.
    """

    key: str
    overbooked_count: int = 0
    fully_booked_count: int = 0
    affected_resource_ids: list[str] = []
    severity: WarningSeverity = "none"


class TimelineResponse(BaseModel):
    """Everything the planner grid needs for one resource kind."""

    kind: ResourceKind
    fetch_window: DateWindow
    visible_window: DateWindow
    groups: list[ResourceGroup]
    cells: list[DailyUsage]
    lowest_available: dict[str, int]
    project_usage: dict[str, ProjectUsage]
    warnings: list[GroupWarning]
    unknown_resource_ids: list[str]


class LowestAvailableResponse(BaseModel):
    """Lowest availability of one resource over a date range."""

    resource_id: str
    start: dt.date
    end: dt.date
    lowest_available: int
