import pytest
from pydantic import ValidationError

from planner.schemas.expansion import ExpansionStatePayload, ExpansionToggleRequest
from planner.services.expansion_state import ExpansionState


def test_toggle_group_flips_state():
    state = ExpansionState()

    assert state.toggle_group("Mixers") is True
    assert state.is_expanded("Mixers")
    assert state.toggle_group("Mixers") is False
    assert not state.is_expanded("Mixers")


def test_toggle_main_group_with_subgroups():
    state = ExpansionState(groups=["Mixers/Analog Mixers"])
    subgroups = ["Mixers/Digital Mixers", "Mixers/Analog Mixers"]

    state.toggle_group("Mixers", expand_all_subgroups=True, subgroup_keys=subgroups)
    assert state.groups == {"Mixers", *subgroups}

    state.toggle_group("Mixers", expand_all_subgroups=True, subgroup_keys=subgroups)
    assert state.groups == frozenset()


def test_expand_all_subgroups_is_ignored_for_subgroup_keys():
    state = ExpansionState()

    state.toggle_group(
        "Mixers/Digital Mixers",
        expand_all_subgroups=True,
        subgroup_keys=["Mixers/Analog Mixers"],
    )

    assert state.groups == {"Mixers/Digital Mixers"}


def test_toggle_resource():
    state = ExpansionState()

    assert state.toggle_resource("eq-1") is True
    assert state.is_resource_expanded("eq-1")
    assert state.toggle_resource("eq-1") is False


def test_initialize_default_only_when_nothing_expanded():
    fresh = ExpansionState()
    fresh.initialize_default(["Mixers", "Microphones"])
    assert fresh.groups == {"Mixers", "Microphones"}

    used = ExpansionState(groups=["WL"])
    used.initialize_default(["Mixers", "Microphones"])
    assert used.groups == {"WL"}


def test_expand_all_and_clear():
    state = ExpansionState(groups=["WL"], resources=["eq-1"])

    state.expand_all(["Mixers", "Mixers/Digital Mixers"])
    assert state.groups == {"Mixers", "Mixers/Digital Mixers"}

    state.clear()
    assert state.groups == frozenset()
    assert state.resources == {"eq-1"}


def test_payload_round_trip_is_sorted():
    state = ExpansionState(groups=["WL", "Mixers"], resources=["b", "a"])

    payload = state.to_payload()

    assert payload == ExpansionStatePayload(groups=["Mixers", "WL"], resources=["a", "b"])
    assert ExpansionState.from_payload(payload).groups == state.groups


@pytest.mark.parametrize(
    "body",
    [{}, {"group_key": "Mixers", "resource_id": "eq-1"}],
)
def test_toggle_request_needs_exactly_one_target(body):
    with pytest.raises(ValidationError):
        ExpansionToggleRequest(**body)
