from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, computed_field

from planner.schemas.resource import BookingRecord, Resource, ResourceKind


class DailyUsage(BaseModel):
    """Usage summary for one resource on one day.

    Attributes:
        resource_id: Resource the summary belongs to.
        date: Calendar day.
        kind: Resource kind; decides the overbooking rule.
        capacity: Base capacity of the resource (0 for unknown resources).
        virtual_additions: Units added that day by subrentals.
        virtual_reductions: Units taken out that day by repairs.
        effective_capacity: Capacity the day is checked against: base plus
            additions minus reductions, never below 0. Always 1 for crew.
        total_used: Sum of booking quantities on that day. For crew, the
            number of assignments regardless of quantity.
        available: Remaining capacity. Signed for equipment, so overbooking
            shows as a negative number; 1 or 0 for crew.
        is_overbooked: Whether usage exceeds what the resource supports.
        deficit: Units short on that day; 0 unless overbooked.
        bookings: Contributing booking records, in ledger order.
        is_known_resource: False when the resource id is missing from the
            catalog snapshot and a conservative result was returned.
    """

    resource_id: str
    date: dt.date
    kind: ResourceKind
    capacity: int
    virtual_additions: int = 0
    virtual_reductions: int = 0
    effective_capacity: int
    total_used: int
    available: int
    is_overbooked: bool
    deficit: int = 0
    bookings: tuple[BookingRecord, ...] = ()
    is_known_resource: bool = True

    model_config = {"frozen": True}


class ProjectDateQuantity(BaseModel):
    """Quantity one project uses of a resource on one day."""

    date: dt.date
    project_name: str
    quantity: int
    event_names: list[str] = Field(default_factory=list)


class ProjectUsage(BaseModel):
    """Drill-down content for one resource within the visible window.

    Attributes:
        resource_id: Resource the usage belongs to.
        project_names: Distinct project names, sorted (case-sensitive).
        project_quantities: Project name -> day -> aggregated quantity.
    """

    resource_id: str
    project_names: list[str]
    project_quantities: dict[str, dict[dt.date, ProjectDateQuantity]]


class ResourceSubGroup(BaseModel):
    """Subfolder (or crew role) with its sorted resources."""

    name: str
    main_group: str
    resources: list[Resource] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        return f"{self.main_group}/{self.name}"


class ResourceGroup(BaseModel):
    """Main folder (or crew department) with direct resources and subgroups."""

    main_group: str
    resources: list[Resource] = Field(default_factory=list)
    sub_groups: list[ResourceSubGroup] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        return self.main_group
