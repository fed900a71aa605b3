"""Expanded folders and resources of one planner view.

Group keys use the ``"Main"`` / ``"Main/Sub"`` format. The availability
engine never reads this state; it only drives what the UI renders.
"""

from __future__ import annotations

from typing import Iterable

from planner.schemas.expansion import ExpansionStatePayload


class ExpansionState:
    """Set of expanded group keys plus expanded resource ids."""

    def __init__(
        self,
        groups: Iterable[str] = (),
        resources: Iterable[str] = (),
    ) -> None:
        self._groups: set[str] = set(groups)
        self._resources: set[str] = set(resources)

    @property
    def groups(self) -> frozenset[str]:
        return frozenset(self._groups)

    @property
    def resources(self) -> frozenset[str]:
        return frozenset(self._resources)

    def is_expanded(self, key: str) -> bool:
        return key in self._groups

    def is_resource_expanded(self, resource_id: str) -> bool:
        return resource_id in self._resources

    def toggle_group(
        self,
        key: str,
        expand_all_subgroups: bool = False,
        subgroup_keys: Iterable[str] = (),
    ) -> bool:
        """Toggle a group and return whether it is expanded afterwards.

        With ``expand_all_subgroups`` on a main group, the listed subgroup
        keys follow the main group's new state.
        """
        expanded = key not in self._groups
        if expand_all_subgroups and "/" not in key:
            affected = {key, *subgroup_keys}
            if expanded:
                self._groups |= affected
            else:
                self._groups -= affected
            return expanded

        if expanded:
            self._groups.add(key)
        else:
            self._groups.discard(key)
        return expanded

    def toggle_resource(self, resource_id: str) -> bool:
        if resource_id in self._resources:
            self._resources.discard(resource_id)
            return False
        self._resources.add(resource_id)
        return True

    def initialize_default(self, main_groups: Iterable[str]) -> None:
        # Only the very first view expands everything.
        if not self._groups:
            self._groups = set(main_groups)

    def expand_all(self, keys: Iterable[str]) -> None:
        self._groups = set(keys)

    def clear(self) -> None:
        self._groups.clear()

    def to_payload(self) -> ExpansionStatePayload:
        return ExpansionStatePayload(
            groups=sorted(self._groups), resources=sorted(self._resources)
        )

    @classmethod
    def from_payload(cls, payload: ExpansionStatePayload) -> "ExpansionState":
        return cls(groups=payload.groups, resources=payload.resources)
