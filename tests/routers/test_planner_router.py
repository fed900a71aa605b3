import datetime as dt

import pytest
from fastapi import status

from db.session import get_db
from planner.schemas.resource import AdjustmentKind, ResourceKind
from planner.services.catalog_cache import CatalogCache, get_catalog_cache
from planner.services.planner_errors import SnapshotMissingError
from tests.utils.factories import make_adjustment, make_booking, make_equipment

DAY = dt.date(2026, 3, 10)


@pytest.fixture()
def planner_app(app, mocker):
    async def _fake_db():
        yield object()

    app.dependency_overrides[get_db] = _fake_db
    app.dependency_overrides[get_catalog_cache] = lambda: CatalogCache(ttl_seconds=300)

    catalog = [
        make_equipment("cl5", "CL5", stock=1, main_group="Mixers", sub_group="Digital"),
        make_equipment("sm58", "SM58", stock=10, main_group="Microphones"),
    ]
    ledger = [
        make_booking("cl5", DAY, 2, project="Festival"),
        make_booking("sm58", DAY, 3, project="Gala"),
        make_booking("ghost", DAY, 1),
    ]
    mocker.patch(
        "planner.services.timeline_service.load_catalog",
        new=mocker.AsyncMock(return_value=catalog),
    )
    ledger_mock = mocker.patch(
        "planner.services.timeline_service.load_ledger",
        new=mocker.AsyncMock(return_value=ledger),
    )
    adjustments_mock = mocker.patch(
        "planner.services.timeline_service.load_stock_adjustments",
        new=mocker.AsyncMock(return_value=[]),
    )
    app.state.ledger_mock = ledger_mock
    app.state.adjustments_mock = adjustments_mock
    return app


@pytest.mark.asyncio
async def test_health(async_client):
    resp = await async_client.get("/health")

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_timeline_returns_grid(planner_app, async_client):
    resp = await async_client.get(
        "/planner/equipment/timeline",
        params={"period_start": "2026-03-09", "period_end": "2026-03-15"},
    )

    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert [g["key"] for g in body["groups"]] == ["Mixers", "Microphones"]
    assert body["groups"][0]["sub_groups"][0]["key"] == "Mixers/Digital"
    assert body["lowest_available"] == {"cl5": 0, "sm58": 7}
    assert body["unknown_resource_ids"] == ["ghost"]
    assert sorted(body["project_usage"]) == ["cl5", "ghost", "sm58"]
    overbooked = [c for c in body["cells"] if c["is_overbooked"]]
    assert [(c["resource_id"], c["available"]) for c in overbooked] == [("cl5", -1)]
    severities = {w["key"]: w["severity"] for w in body["warnings"]}
    assert severities["Mixers"] == "critical"
    assert severities["Microphones"] == "none"


@pytest.mark.asyncio
async def test_timeline_swaps_inverted_period(planner_app, async_client):
    resp = await async_client.get(
        "/planner/equipment/timeline",
        params={"period_start": "2026-03-15", "period_end": "2026-03-09"},
    )

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["visible_window"] == {"start": "2026-03-09", "end": "2026-03-15"}


@pytest.mark.asyncio
async def test_timeline_passes_owner_scope(planner_app, async_client):
    await async_client.get(
        "/planner/crew/timeline",
        params={
            "period_start": "2026-03-09",
            "period_end": "2026-03-15",
            "owner_id": "owner-7",
        },
    )

    _db, kind, _window, owner_id = planner_app.state.ledger_mock.await_args.args
    assert kind == ResourceKind.CREW
    assert owner_id == "owner-7"


@pytest.mark.asyncio
async def test_unknown_kind_is_rejected(planner_app, async_client):
    resp = await async_client.get(
        "/planner/vehicles/timeline",
        params={"period_start": "2026-03-09", "period_end": "2026-03-15"},
    )

    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_resource_usage(planner_app, async_client):
    resp = await async_client.get(
        "/planner/equipment/resources/cl5/usage", params={"day": "2026-03-10"}
    )

    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert (body["total_used"], body["available"], body["is_overbooked"]) == (2, -1, True)
    assert body["bookings"][0]["source_project"] == "Festival"


@pytest.mark.asyncio
async def test_lowest_available(planner_app, async_client):
    resp = await async_client.get(
        "/planner/equipment/resources/sm58/lowest-available",
        params={"start": "2026-03-09", "end": "2026-03-11"},
    )

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["lowest_available"] == 7


@pytest.mark.asyncio
async def test_missing_snapshot_maps_to_500(planner_app, async_client, mocker):
    mocker.patch(
        "planner.routers.planner.build_timeline",
        new=mocker.AsyncMock(
            side_effect=SnapshotMissingError("ledger snapshot is required")
        ),
    )

    resp = await async_client.get(
        "/planner/equipment/timeline",
        params={"period_start": "2026-03-09", "period_end": "2026-03-15"},
    )

    assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert resp.json()["detail"] == "Planner data could not be loaded"


@pytest.mark.asyncio
async def test_expansion_routes(app, async_client, mocker):
    async def _fake_db():
        yield object()

    app.dependency_overrides[get_db] = _fake_db
    stored = {
        "storage_key": "equipmentPlannerExpandedGroups",
        "groups": ["Mixers"],
        "resources": [],
    }
    toggle = mocker.patch(
        "planner.routers.planner.toggle_expansion_state",
        new=mocker.AsyncMock(return_value=stored),
    )
    mocker.patch(
        "planner.routers.planner.get_expansion_state",
        new=mocker.AsyncMock(return_value=stored),
    )

    read = await async_client.get("/planner/expansion/equipmentPlannerExpandedGroups")
    toggled = await async_client.post(
        "/planner/expansion/equipmentPlannerExpandedGroups/toggle",
        json={"group_key": "Mixers"},
    )
    invalid = await async_client.post(
        "/planner/expansion/equipmentPlannerExpandedGroups/toggle", json={}
    )

    assert read.json()["groups"] == ["Mixers"]
    assert toggled.status_code == status.HTTP_200_OK
    assert toggle.await_args.args[2].group_key == "Mixers"
    assert invalid.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_subrental_covers_equipment_shortage(planner_app, async_client):
    planner_app.state.adjustments_mock.return_value = [
        make_adjustment("cl5", AdjustmentKind.SUBRENTAL, 1, DAY, DAY)
    ]

    resp = await async_client.get(
        "/planner/equipment/resources/cl5/usage", params={"day": "2026-03-10"}
    )

    body = resp.json()
    assert body["capacity"] == 1
    assert body["effective_capacity"] == 2
    assert (body["available"], body["is_overbooked"], body["deficit"]) == (0, False, 0)


@pytest.mark.asyncio
async def test_crew_timeline_skips_stock_adjustments(planner_app, async_client):
    await async_client.get(
        "/planner/crew/timeline",
        params={"period_start": "2026-03-09", "period_end": "2026-03-15"},
    )

    planner_app.state.adjustments_mock.assert_not_awaited()
