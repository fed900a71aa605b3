import datetime as dt

from planner.schemas.resource import ResourceKind
from planner.schemas.timeline import DateWindow
from planner.services.availability_engine import AvailabilityEngine
from planner.services.group_warnings import analyze_group_warnings, classify_severity
from planner.services.resource_tree_service import build_resource_tree
from tests.utils.factories import make_booking, make_crew, make_equipment

DAY = dt.date(2026, 3, 10)
WEEK = DateWindow(start=DAY, end=DAY + dt.timedelta(days=6))


def _warnings_by_key(catalog, ledger, kind=ResourceKind.EQUIPMENT):
    engine = AvailabilityEngine(catalog, ledger, kind=kind)
    groups = build_resource_tree(catalog, (), {})
    return {w.key: w for w in analyze_group_warnings(groups, engine, WEEK)}


def test_classify_severity():
    assert classify_severity(1, 0) == "critical"
    assert classify_severity(2, 5) == "critical"
    assert classify_severity(0, 3) == "warning"
    assert classify_severity(0, 0) == "none"


def test_subgroup_conflicts_roll_up_to_main_group():
    catalog = [
        make_equipment("cl5", "CL5", stock=1, main_group="Mixers", sub_group="Digital"),
        make_equipment("m32", "M32", stock=2, main_group="Mixers", sub_group="Digital"),
        make_equipment("sm58", "SM58", stock=4, main_group="Microphones"),
    ]
    ledger = [
        make_booking("cl5", DAY, 2),
        make_booking("cl5", DAY + dt.timedelta(days=1), 3),
        make_booking("m32", DAY, 2),
        make_booking("sm58", DAY, 1),
    ]

    warnings = _warnings_by_key(catalog, ledger)

    digital = warnings["Mixers/Digital"]
    assert digital.overbooked_count == 2
    assert digital.fully_booked_count == 1
    assert digital.affected_resource_ids == ["cl5"]
    assert digital.severity == "critical"

    mixers = warnings["Mixers"]
    assert (mixers.overbooked_count, mixers.fully_booked_count) == (2, 1)
    assert mixers.severity == "critical"

    assert warnings["Microphones"].severity == "none"


def test_fully_booked_stock_is_a_warning():
    catalog = [make_equipment("di", "DI box", stock=2, main_group="DI-boxes")]

    warnings = _warnings_by_key(catalog, [make_booking("di", DAY, 2)])

    assert warnings["DI-boxes"].severity == "warning"
    assert warnings["DI-boxes"].affected_resource_ids == []


def test_crew_double_booking_is_critical_and_single_is_not_a_warning():
    catalog = [
        make_crew("alex", "Alex", "Sonic City", ("FOH",)),
        make_crew("sam", "Sam", "Freelancers", ("Monitor",)),
    ]
    ledger = [
        make_booking("alex", DAY, project="A", kind=ResourceKind.CREW),
        make_booking("alex", DAY, project="B", kind=ResourceKind.CREW),
        make_booking("sam", DAY, project="A", kind=ResourceKind.CREW),
    ]

    warnings = _warnings_by_key(catalog, ledger, ResourceKind.CREW)

    assert warnings["Sonic City"].severity == "critical"
    assert warnings["Sonic City/FOH"].affected_resource_ids == ["alex"]
    assert warnings["Freelancers"].severity == "none"


def test_cells_outside_window_are_ignored():
    catalog = [make_equipment("di", "DI box", stock=1, main_group="DI-boxes")]
    ledger = [make_booking("di", DAY + dt.timedelta(days=30), 5)]

    assert _warnings_by_key(catalog, ledger)["DI-boxes"].severity == "none"
