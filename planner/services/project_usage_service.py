"""Per-resource project breakdown for the planner's expandable rows."""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from typing import Iterable

from planner.schemas.resource import BookingRecord
from planner.schemas.timeline import DateWindow
from planner.schemas.usage import ProjectDateQuantity, ProjectUsage
from planner.services.planner_errors import require_snapshot


def build_project_usage_index(
    ledger: Iterable[BookingRecord], visible_window: DateWindow
) -> dict[str, ProjectUsage]:
    """Group bookings inside the visible window by resource and project.

    The ledger usually spans a wider fetch window than what is on screen;
    only records dated inside ``visible_window`` (inclusive) are used, so
    drill-down rows never show projects outside the visible dates.

    Args:
        ledger: Booking records for the fetch window.
        visible_window: Days currently displayed.

    Returns:
        Mapping of resource id to :class:`ProjectUsage`. Resources without
        bookings in the window are absent.

    Raises:
        SnapshotMissingError: If ``ledger`` is ``None``.
    """
    require_snapshot(ledger, "ledger", "build_project_usage_index")
    require_snapshot(visible_window, "visible_window", "build_project_usage_index")

    # resource -> project -> day -> [quantity, event names]
    grouped: dict[str, dict[str, dict[dt.date, list]]] = defaultdict(
        lambda: defaultdict(dict)
    )
    for booking in ledger:
        if not visible_window.contains(booking.date):
            continue
        per_day = grouped[booking.resource_id][booking.source_project]
        cell = per_day.get(booking.date)
        if cell is None:
            per_day[booking.date] = [booking.quantity, [booking.source_event]]
            continue
        cell[0] += booking.quantity
        if booking.source_event not in cell[1]:
            cell[1].append(booking.source_event)

    index: dict[str, ProjectUsage] = {}
    for resource_id, projects in grouped.items():
        quantities = {
            project: {
                day: ProjectDateQuantity(
                    date=day,
                    project_name=project,
                    quantity=quantity,
                    event_names=events,
                )
                for day, (quantity, events) in sorted(per_day.items())
            }
            for project, per_day in projects.items()
        }
        index[resource_id] = ProjectUsage(
            resource_id=resource_id,
            project_names=sorted(projects),
            project_quantities=quantities,
        )
    return index


def get_project_quantity_for_date(
    index: dict[str, ProjectUsage],
    project_name: str,
    resource_id: str,
    day: dt.date,
) -> ProjectDateQuantity | None:
    """Return the aggregated quantity of one project for a drill-down cell."""
    usage = index.get(resource_id)
    if usage is None:
        return None
    per_day = usage.project_quantities.get(project_name)
    if per_day is None:
        return None
    return per_day.get(day)
