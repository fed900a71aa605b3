"""Availability and overbooking calculations for planner resources.

One engine serves both equipment and crew. The only kind-specific parts are
the usage, availability and overbooking rules in :data:`OVERBOOKING_RULES`.

Everything here is synchronous and side-effect free apart from a warning log
line for unknown resource ids. Ledgers are expected to be per kind: resource
ids are only unique within their kind.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from typing import Callable, Iterable, NamedTuple, Sequence

from planner.core.logging import logger
from planner.schemas.resource import (
    AdjustmentKind,
    BookingRecord,
    Resource,
    ResourceKind,
    StockAdjustment,
)
from planner.schemas.timeline import DateWindow
from planner.schemas.usage import DailyUsage
from planner.services.planner_errors import require_snapshot


class OverbookingRule(NamedTuple):
    """Kind-specific availability rule.

    ``used`` turns the day's bookings into a usage count. ``available`` and
    ``is_overbooked`` receive ``(effective_capacity, total_used)``.
    """

    used: Callable[[Sequence[BookingRecord]], int]
    available: Callable[[int, int], int]
    is_overbooked: Callable[[int, int], bool]


OVERBOOKING_RULES: dict[ResourceKind, OverbookingRule] = {
    # Stock count; negative availability means overbooked.
    ResourceKind.EQUIPMENT: OverbookingRule(
        used=lambda bookings: sum(b.quantity for b in bookings),
        available=lambda capacity, used: capacity - used,
        is_overbooked=lambda capacity, used: used > capacity,
    ),
    # A person is either free or not; each assignment counts once, whatever
    # its quantity, and a second assignment is a conflict.
    ResourceKind.CREW: OverbookingRule(
        used=len,
        available=lambda _capacity, used: 1 if used == 0 else 0,
        is_overbooked=lambda _capacity, used: used > 1,
    ),
}


DateRange = DateWindow | Iterable[dt.date]


def _days_of(date_range: DateRange) -> list[dt.date]:
    if isinstance(date_range, DateWindow):
        return list(date_range.days())
    return list(date_range)


def summarize_usage(
    resource: Resource,
    day: dt.date,
    bookings: Sequence[BookingRecord],
    adjustments: Iterable[StockAdjustment] = (),
) -> DailyUsage:
    """Build the :class:`DailyUsage` of ``resource`` from its bookings on ``day``.

    ``bookings`` must already be filtered to the resource and day.
    ``adjustments`` must be filtered to the resource; only those active on
    ``day`` count. Crew ignores adjustments.
    """
    rule = OVERBOOKING_RULES[resource.kind]

    additions = reductions = 0
    if resource.kind == ResourceKind.EQUIPMENT:
        for adjustment in adjustments:
            if not adjustment.is_active(day):
                continue
            if adjustment.kind == AdjustmentKind.SUBRENTAL:
                additions += adjustment.quantity
            else:
                reductions += adjustment.quantity
    effective = max(resource.capacity + additions - reductions, 0)

    total_used = rule.used(bookings)
    is_overbooked = rule.is_overbooked(effective, total_used)
    return DailyUsage(
        resource_id=resource.id,
        date=day,
        kind=resource.kind,
        capacity=resource.capacity,
        virtual_additions=additions,
        virtual_reductions=reductions,
        effective_capacity=effective,
        total_used=total_used,
        available=rule.available(effective, total_used),
        is_overbooked=is_overbooked,
        deficit=max(total_used - effective, 0) if is_overbooked else 0,
        bookings=tuple(bookings),
    )


def unknown_resource_usage(
    resource_id: str, day: dt.date, kind: ResourceKind = ResourceKind.EQUIPMENT
) -> DailyUsage:
    """Conservative result for a resource id missing from the catalog."""
    return DailyUsage(
        resource_id=resource_id,
        date=day,
        kind=kind,
        capacity=0,
        effective_capacity=0,
        total_used=0,
        available=0,
        is_overbooked=False,
        bookings=(),
        is_known_resource=False,
    )


def compute_daily_usage(
    resource: Resource,
    day: dt.date,
    ledger: Iterable[BookingRecord],
    stock_adjustments: Iterable[StockAdjustment] = (),
) -> DailyUsage:
    """Compute usage of ``resource`` on ``day`` from a ledger snapshot.

    Bookings match on resource id and exact calendar day. A day without
    bookings yields a zero-usage result, never ``None``. Equipment is
    checked against its effective stock for the day: base stock plus active
    subrentals minus active repairs.

    Raises:
        SnapshotMissingError: If ``resource`` or ``ledger`` is ``None``.
    """
    require_snapshot(resource, "resource", "compute_daily_usage")
    require_snapshot(ledger, "ledger", "compute_daily_usage")
    matching = [b for b in ledger if b.resource_id == resource.id and b.date == day]
    adjustments = [a for a in stock_adjustments if a.resource_id == resource.id]
    return summarize_usage(resource, day, matching, adjustments)


def get_lowest_available(
    resource_id: str,
    date_range: DateRange,
    catalog: Iterable[Resource],
    ledger: Iterable[BookingRecord],
    stock_adjustments: Iterable[StockAdjustment] = (),
) -> int:
    """Return the lowest availability of a resource over ``date_range``.

    The result is clamped to 0; per-day :class:`DailyUsage` keeps the signed
    value. An empty range returns the raw capacity and an unknown resource
    returns 0.

    Raises:
        SnapshotMissingError: If ``catalog`` or ``ledger`` is ``None``.
    """
    require_snapshot(catalog, "catalog", "get_lowest_available")
    require_snapshot(ledger, "ledger", "get_lowest_available")
    engine = AvailabilityEngine(catalog, ledger, stock_adjustments=stock_adjustments)
    return engine.lowest_available(resource_id, date_range)


class AvailabilityEngine:
    """Availability lookups over one catalog and ledger snapshot.

    The ledger is indexed once by ``(resource_id, day)`` and daily usage is
    memoised per key for the lifetime of the instance. Build a new engine
    when either snapshot changes.

    Args:
        catalog: Resources known to the planner.
        ledger: Booking records for the fetched date window.
        kind: Kind reported for resource ids missing from the catalog.
        stock_adjustments: Subrentals and repairs changing equipment stock
            for part of the window.

    Raises:
        SnapshotMissingError: If ``catalog`` or ``ledger`` is ``None``.
    """

    def __init__(
        self,
        catalog: Iterable[Resource],
        ledger: Iterable[BookingRecord],
        kind: ResourceKind = ResourceKind.EQUIPMENT,
        stock_adjustments: Iterable[StockAdjustment] = (),
    ) -> None:
        require_snapshot(catalog, "catalog", "AvailabilityEngine")
        require_snapshot(ledger, "ledger", "AvailabilityEngine")

        self.kind = kind
        self._resources: dict[str, Resource] = {r.id: r for r in catalog}

        index: dict[tuple[str, dt.date], list[BookingRecord]] = defaultdict(list)
        for booking in ledger:
            index[(booking.resource_id, booking.date)].append(booking)
        self._bookings: dict[tuple[str, dt.date], tuple[BookingRecord, ...]] = {
            key: tuple(rows) for key, rows in index.items()
        }

        adjustments: dict[str, list[StockAdjustment]] = defaultdict(list)
        for adjustment in stock_adjustments:
            adjustments[adjustment.resource_id].append(adjustment)
        self._adjustments: dict[str, tuple[StockAdjustment, ...]] = {
            rid: tuple(rows) for rid, rows in adjustments.items()
        }

        self._usage: dict[tuple[str, dt.date], DailyUsage] = {}
        self._reported_unknown: set[str] = set()

    @property
    def resources(self) -> tuple[Resource, ...]:
        return tuple(self._resources.values())

    def resource(self, resource_id: str) -> Resource | None:
        return self._resources.get(resource_id)

    def _report_unknown(self, resource_id: str) -> None:
        if resource_id in self._reported_unknown:
            return
        self._reported_unknown.add(resource_id)
        logger.warning(
            "Availability requested for resource %s which is not in the catalog snapshot",
            resource_id,
        )

    def daily_usage(self, resource_id: str, day: dt.date) -> DailyUsage:
        """Return usage of a resource on a day (see :func:`compute_daily_usage`)."""
        key = (resource_id, day)
        cached = self._usage.get(key)
        if cached is not None:
            return cached

        resource = self._resources.get(resource_id)
        if resource is None:
            self._report_unknown(resource_id)
            return unknown_resource_usage(resource_id, day, self.kind)

        usage = summarize_usage(
            resource,
            day,
            self._bookings.get(key, ()),
            self._adjustments.get(resource_id, ()),
        )
        self._usage[key] = usage
        return usage

    def lowest_available(self, resource_id: str, date_range: DateRange) -> int:
        """Return the lowest availability over ``date_range``, clamped to 0."""
        resource = self._resources.get(resource_id)
        if resource is None:
            self._report_unknown(resource_id)
            return 0

        days = _days_of(date_range)
        if not days:
            return resource.capacity

        lowest = min(self.daily_usage(resource_id, day).available for day in days)
        return max(lowest, 0)

    def booked_cells(self, date_range: DateRange) -> list[DailyUsage]:
        """Return usage for every known (resource, day) with bookings in range.

        Cells are ordered by day, then resource id.
        """
        wanted = set(_days_of(date_range))
        keys = sorted(
            (key for key in self._bookings if key[1] in wanted and key[0] in self._resources),
            key=lambda key: (key[1], key[0]),
        )
        return [self.daily_usage(resource_id, day) for resource_id, day in keys]

    def overbooked_cells(self, date_range: DateRange) -> list[DailyUsage]:
        """Return the overbooked cells of :meth:`booked_cells`."""
        return [usage for usage in self.booked_cells(date_range) if usage.is_overbooked]

    def unknown_resource_ids(self) -> list[str]:
        """Resource ids referenced by the ledger but absent from the catalog."""
        return sorted({rid for rid, _ in self._bookings if rid not in self._resources})
