"""Conflict rollups per folder for the planner header rows.

A main group's counts include the cells of its subgroups. Severity is a
display hint only; the engine's ``is_overbooked`` flag stays the source of
truth.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from planner.schemas.resource import ResourceKind
from planner.schemas.timeline import GroupWarning, WarningSeverity
from planner.schemas.usage import DailyUsage, ResourceGroup
from planner.services.availability_engine import AvailabilityEngine, DateRange


def classify_severity(overbooked_count: int, fully_booked_count: int) -> WarningSeverity:
    """``critical`` for any overbooking, ``warning`` for fully booked stock."""
    if overbooked_count > 0:
        return "critical"
    if fully_booked_count > 0:
        return "warning"
    return "none"


def is_fully_booked(usage: DailyUsage) -> bool:
    """Equipment cell that uses exactly all of the day's effective stock."""
    return (
        usage.kind == ResourceKind.EQUIPMENT
        and usage.effective_capacity > 0
        and usage.total_used == usage.effective_capacity
    )


def _group_keys_by_resource(groups: Iterable[ResourceGroup]) -> dict[str, list[str]]:
    keys: dict[str, list[str]] = {}
    for group in groups:
        for resource in group.resources:
            keys[resource.id] = [group.key]
        for sub in group.sub_groups:
            for resource in sub.resources:
                keys[resource.id] = [group.key, sub.key]
    return keys


def analyze_group_warnings(
    groups: Iterable[ResourceGroup],
    engine: AvailabilityEngine,
    date_range: DateRange,
) -> list[GroupWarning]:
    """Count overbooked and fully booked cells per group and subgroup.

    Args:
        groups: Resource tree, as built by ``build_resource_tree``.
        engine: Engine over the catalog and ledger of the tree.
        date_range: Days to inspect, usually the visible window.

    Returns:
        One warning per group and subgroup key, in tree order. Groups
        without conflicts are included with severity ``none``.
    """
    groups = list(groups)
    keys_by_resource = _group_keys_by_resource(groups)

    overbooked: dict[str, int] = defaultdict(int)
    fully_booked: dict[str, int] = defaultdict(int)
    affected: dict[str, set[str]] = defaultdict(set)

    for usage in engine.booked_cells(date_range):
        for key in keys_by_resource.get(usage.resource_id, ()):
            if usage.is_overbooked:
                overbooked[key] += 1
                affected[key].add(usage.resource_id)
            elif is_fully_booked(usage):
                fully_booked[key] += 1

    warnings: list[GroupWarning] = []
    for group in groups:
        for key in (group.key, *(sub.key for sub in group.sub_groups)):
            warnings.append(
                GroupWarning(
                    key=key,
                    overbooked_count=overbooked[key],
                    fully_booked_count=fully_booked[key],
                    affected_resource_ids=sorted(affected[key]),
                    severity=classify_severity(overbooked[key], fully_booked[key]),
                )
            )
    return warnings
