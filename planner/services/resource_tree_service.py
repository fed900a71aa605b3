"""Folder tree for planner resources.

Ordering contract: groups and subgroups named in the supplied order lists
come first, in list order. Everything else sorts alphabetically after them.
Alphabetical comparisons are case-insensitive (``str.casefold``), with the
raw string and then the resource id as tie-breakers, so the output does not
depend on input order.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from planner.schemas.resource import Resource
from planner.schemas.usage import ResourceGroup, ResourceSubGroup


def _name_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def _resource_key(resource: Resource) -> tuple[str, str, str]:
    return (*_name_key(resource.name), resource.id)


def _ordered_key(name: str, order: Sequence[str]) -> tuple[int, int, str, str]:
    """Listed names first by position, then the rest alphabetically."""
    try:
        return (0, order.index(name), "", "")
    except ValueError:
        return (1, 0, *_name_key(name))


def sort_group_names(names: Iterable[str], order: Sequence[str]) -> list[str]:
    """Sort group names with the listed-first, then alphabetical rule."""
    return sorted(names, key=lambda name: _ordered_key(name, order))


def build_resource_tree(
    resources: Iterable[Resource],
    group_order: Sequence[str],
    subgroup_order_by_group: Mapping[str, Sequence[str]],
) -> list[ResourceGroup]:
    """Organise a flat resource list into sorted groups and subgroups.

    Args:
        resources: Catalog snapshot in any order.
        group_order: Priority list for main groups.
        subgroup_order_by_group: Priority list of subgroups per main group.

    Returns:
        Groups in display order, each with sorted direct resources and
        sorted subgroups.
    """
    direct: dict[str, list[Resource]] = {}
    nested: dict[str, dict[str, list[Resource]]] = {}

    for resource in resources:
        main = resource.group_path.main_group
        sub = resource.group_path.sub_group
        direct.setdefault(main, [])
        subgroups = nested.setdefault(main, {})
        if sub is None:
            direct[main].append(resource)
        else:
            subgroups.setdefault(sub, []).append(resource)

    groups: list[ResourceGroup] = []
    for main in sort_group_names(direct, group_order):
        sub_order = subgroup_order_by_group.get(main, ())
        sub_groups = [
            ResourceSubGroup(
                name=sub,
                main_group=main,
                resources=sorted(nested[main][sub], key=_resource_key),
            )
            for sub in sort_group_names(nested[main], sub_order)
        ]
        groups.append(
            ResourceGroup(
                main_group=main,
                resources=sorted(direct[main], key=_resource_key),
                sub_groups=sub_groups,
            )
        )
    return groups


def flatten_tree(groups: Iterable[ResourceGroup]) -> list[str]:
    """Return every group and subgroup key in display order."""
    keys: list[str] = []
    for group in groups:
        keys.append(group.key)
        keys.extend(sub.key for sub in group.sub_groups)
    return keys
