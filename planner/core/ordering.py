"""Display ordering for planner folders and departments.

Groups listed here are shown first, in list order; anything else follows
alphabetically. Subfolder orders are keyed by their main folder name.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from planner.schemas.resource import ResourceKind


FOLDER_ORDER: tuple[str, ...] = (
    "Mixers",
    "Microphones",
    "DI-boxes",
    "Cables/Split",
    "WL",
    "Outboard",
    "Stands/Clamps",
    "Misc",
    "Flightcases",
    "Consumables",
)

SUBFOLDER_ORDER: dict[str, tuple[str, ...]] = {
    "Mixers": ("Mixrack", "Surface", "Expansion", "Small format"),
    "Microphones": (
        "Dynamic",
        "Condenser",
        "Ribbon",
        "Shotgun",
        "WL capsule",
        "Special/Misc",
    ),
    "DI-boxes": ("Active", "Passive", "Special"),
    "Cables/Split": ("CAT", "XLR", "LK37/SB", "Jack", "Coax", "Fibre", "Schuko"),
    "WL": ("MIC", "IEM", "Antenna"),
}

DEPARTMENT_ORDER: tuple[str, ...] = (
    "Sonic City",
    "Associates",
    "Freelancers",
)


def order_for(
    kind: ResourceKind,
) -> tuple[Sequence[str], Mapping[str, Sequence[str]]]:
    """Return ``(group_order, subgroup_order_by_group)`` for a resource kind."""
    if kind is ResourceKind.CREW:
        return DEPARTMENT_ORDER, {}
    return FOLDER_ORDER, SUBFOLDER_ORDER
