import pytest

from planner.models.expansion_state import ExpansionStateRecord
from planner.schemas.expansion import ExpansionStatePayload, ExpansionToggleRequest
from planner.services.expansion_state_service import (
    get_expansion_state,
    replace_expansion_state,
    toggle_expansion_state,
)


class _FakeSession:
    def __init__(self):
        self.rows: dict[str, ExpansionStateRecord] = {}
        self._pending: list[ExpansionStateRecord] = []
        self.commits = 0
        self.get_calls: list[tuple[str, dict]] = []

    async def get(self, model, key, **kwargs):  # type: ignore[no-untyped-def]
        assert model is ExpansionStateRecord
        self.get_calls.append((key, kwargs))
        return self.rows.get(key)

    def add(self, obj: ExpansionStateRecord) -> None:
        self._pending.append(obj)

    async def commit(self) -> None:
        for obj in self._pending:
            self.rows[obj.storage_key] = obj
        self._pending.clear()
        self.commits += 1


@pytest.mark.asyncio
async def test_unknown_key_loads_empty_state():
    state = await get_expansion_state(_FakeSession(), "equipmentPlannerExpandedGroups")

    assert state.storage_key == "equipmentPlannerExpandedGroups"
    assert state.groups == []
    assert state.resources == []


@pytest.mark.asyncio
async def test_replace_then_toggle_persists_changes():
    db = _FakeSession()
    key = "crewPlannerExpandedGroups"

    await replace_expansion_state(
        db, key, ExpansionStatePayload(groups=["Sonic City"], resources=[])
    )
    updated = await toggle_expansion_state(
        db, key, ExpansionToggleRequest(group_key="Freelancers")
    )

    assert updated.groups == ["Freelancers", "Sonic City"]
    assert db.rows[key].groups == ["Freelancers", "Sonic City"]
    assert db.commits == 2


@pytest.mark.asyncio
async def test_toggle_resource_round_trip():
    db = _FakeSession()
    key = "equipmentPlannerExpandedGroups"

    first = await toggle_expansion_state(db, key, ExpansionToggleRequest(resource_id="eq-1"))
    second = await toggle_expansion_state(db, key, ExpansionToggleRequest(resource_id="eq-1"))

    assert first.resources == ["eq-1"]
    assert second.resources == []


@pytest.mark.asyncio
async def test_toggle_locks_the_stored_row():
    db = _FakeSession()
    key = "equipmentPlannerExpandedGroups"

    await toggle_expansion_state(db, key, ExpansionToggleRequest(group_key="Audio"))

    key_used, kwargs = db.get_calls[0]
    assert key_used == key
    assert kwargs.get("with_for_update") is True


@pytest.mark.asyncio
async def test_plain_read_does_not_lock():
    db = _FakeSession()

    await get_expansion_state(db, "crewPlannerExpandedGroups")

    assert db.get_calls == [("crewPlannerExpandedGroups", {"with_for_update": False})]
