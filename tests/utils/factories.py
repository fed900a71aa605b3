from __future__ import annotations

import datetime as dt
from types import SimpleNamespace

from planner.schemas.resource import (
    AdjustmentKind,
    BookingRecord,
    GroupPath,
    Resource,
    ResourceKind,
    StockAdjustment,
)


def make_equipment(
    resource_id: str = "eq-1",
    name: str = "SM58",
    stock: int = 10,
    main_group: str = "Microphones",
    sub_group: str | None = None,
) -> Resource:
    return Resource(
        id=resource_id,
        name=name,
        kind=ResourceKind.EQUIPMENT,
        capacity=stock,
        group_path=GroupPath(main_group=main_group, sub_group=sub_group),
    )


def make_crew(
    resource_id: str = "crew-1",
    name: str = "Alex",
    department: str = "Sonic City",
    roles: tuple[str, ...] = ("FOH",),
) -> Resource:
    return Resource(
        id=resource_id,
        name=name,
        kind=ResourceKind.CREW,
        group_path=GroupPath(
            main_group=department, sub_group=roles[0] if roles else None
        ),
        roles=roles,
    )


def make_booking(
    resource_id: str = "eq-1",
    day: dt.date = dt.date(2026, 3, 10),
    quantity: int = 1,
    project: str = "Festival",
    event: str = "Show",
    kind: ResourceKind = ResourceKind.EQUIPMENT,
) -> BookingRecord:
    return BookingRecord(
        resource_id=resource_id,
        date=day,
        quantity=quantity,
        source_project=project,
        source_event=event,
        kind=kind,
    )


def make_adjustment(
    resource_id: str = "eq-1",
    kind: AdjustmentKind = AdjustmentKind.SUBRENTAL,
    quantity: int = 2,
    start: dt.date = dt.date(2026, 3, 10),
    end: dt.date | None = dt.date(2026, 3, 12),
) -> StockAdjustment:
    return StockAdjustment(
        resource_id=resource_id, kind=kind, quantity=quantity, start=start, end=end
    )


def make_stock_row(**overrides) -> SimpleNamespace:
    """Row as returned by the subrental and repair queries."""
    row = dict(
        resource_id="eq-1",
        quantity=2,
        order_id="order-1",
        start_date=dt.date(2026, 3, 10),
        end_date=dt.date(2026, 3, 12),
    )
    row.update(overrides)
    return SimpleNamespace(**row)

def make_equipment_row(**overrides) -> SimpleNamespace:
    """Row as returned by the equipment ledger query."""
    row = dict(
        resource_id="eq-1",
        quantity=2,
        date=dt.date(2026, 3, 10),
        event_name="Show",
        location="Main Hall",
        project_name="Festival",
        event_type="Show",
        event_type_color="#FF0000",
    )
    row.update(overrides)
    return SimpleNamespace(**row)


def make_crew_row(**overrides) -> SimpleNamespace:
    """Row as returned by the crew ledger query."""
    row = dict(
        resource_id="crew-1",
        role_name="FOH",
        date=dt.date(2026, 3, 10),
        event_name="Show",
        location="Main Hall",
        project_name="Festival",
        event_type="Show",
        event_type_color="#FF0000",
    )
    row.update(overrides)
    return SimpleNamespace(**row)
