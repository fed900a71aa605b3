from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class ExpansionStatePayload(BaseModel):
    """Serialisable expansion state."""

    groups: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)


class ExpansionStateRead(ExpansionStatePayload):
    """Expansion state stored under a storage key."""

    storage_key: str


class ExpansionStateWrite(ExpansionStatePayload):
    """Full replacement of a stored expansion state."""


class ExpansionToggleRequest(BaseModel):
    """Toggle one group or one resource.

    Exactly one of ``group_key`` and ``resource_id`` must be given.
    ``subgroup_keys`` is only used together with ``expand_all_subgroups``.
    """

    group_key: str | None = None
    resource_id: str | None = None
    expand_all_subgroups: bool = False
    subgroup_keys: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _one_target(self) -> "ExpansionToggleRequest":
        if (self.group_key is None) == (self.resource_id is None):
            raise ValueError("give exactly one of group_key and resource_id")
        return self
