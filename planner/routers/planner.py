from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, HTTPException, Query, status

from planner.core.logging import logger
from planner.deps import CatalogCacheDep, DbDep
from planner.schemas.expansion import (
    ExpansionStateRead,
    ExpansionStateWrite,
    ExpansionToggleRequest,
)
from planner.schemas.resource import ResourceKind
from planner.schemas.timeline import LowestAvailableResponse, TimelineResponse
from planner.schemas.usage import DailyUsage
from planner.services.expansion_state_service import (
    get_expansion_state,
    replace_expansion_state,
    toggle_expansion_state,
)
from planner.services.planner_errors import SnapshotMissingError
from planner.services.timeline_service import (
    build_timeline,
    get_resource_lowest_available,
    get_resource_usage,
)
from planner.services.timeline_window import ordered_window

router = APIRouter()


def _snapshot_failure(exc: SnapshotMissingError) -> HTTPException:
    logger.error("Planner snapshot missing: %s (%s)", exc, exc.technical_detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Planner data could not be loaded",
    )


# Expansion routes are declared first so "expansion" never matches {kind}.
@router.get("/expansion/{storage_key}", response_model=ExpansionStateRead)
async def read_expansion_state(db: DbDep, storage_key: str) -> ExpansionStateRead:
    """Return the stored expansion state; unknown keys yield an empty state."""
    return await get_expansion_state(db, storage_key)


@router.post("/expansion/{storage_key}/toggle", response_model=ExpansionStateRead)
async def toggle_expansion(
    db: DbDep, storage_key: str, payload: ExpansionToggleRequest
) -> ExpansionStateRead:
    return await toggle_expansion_state(db, storage_key, payload)


@router.put("/expansion/{storage_key}", response_model=ExpansionStateRead)
async def write_expansion_state(
    db: DbDep, storage_key: str, payload: ExpansionStateWrite
) -> ExpansionStateRead:
    return await replace_expansion_state(db, storage_key, payload)


@router.get("/{kind}/timeline", response_model=TimelineResponse)
async def get_timeline(
    db: DbDep,
    cache: CatalogCacheDep,
    kind: ResourceKind,
    period_start: dt.date = Query(...),
    period_end: dt.date = Query(...),
    visible_start: dt.date | None = Query(None),
    visible_end: dt.date | None = Query(None),
    owner_id: str | None = Query(None),
) -> TimelineResponse:
    """Planner grid for equipment or crew.

    The visible window defaults to the period. Inverted ranges are swapped.
    """
    period = ordered_window(period_start, period_end)
    visible = ordered_window(
        visible_start or period.start, visible_end or period.end
    )
    try:
        return await build_timeline(
            db, kind, period, visible, owner_id=owner_id, cache=cache
        )
    except SnapshotMissingError as exc:
        raise _snapshot_failure(exc) from exc


@router.get("/{kind}/resources/{resource_id}/usage", response_model=DailyUsage)
async def get_usage(
    db: DbDep,
    cache: CatalogCacheDep,
    kind: ResourceKind,
    resource_id: str,
    day: dt.date = Query(...),
    owner_id: str | None = Query(None),
) -> DailyUsage:
    try:
        return await get_resource_usage(
            db, kind, resource_id, day, owner_id=owner_id, cache=cache
        )
    except SnapshotMissingError as exc:
        raise _snapshot_failure(exc) from exc


@router.get(
    "/{kind}/resources/{resource_id}/lowest-available",
    response_model=LowestAvailableResponse,
)
async def get_lowest_available(
    db: DbDep,
    cache: CatalogCacheDep,
    kind: ResourceKind,
    resource_id: str,
    start: dt.date = Query(...),
    end: dt.date = Query(...),
    owner_id: str | None = Query(None),
) -> LowestAvailableResponse:
    """Lowest availability of one resource over ``[start, end]``, clamped to 0."""
    try:
        return await get_resource_lowest_available(
            db,
            kind,
            resource_id,
            ordered_window(start, end),
            owner_id=owner_id,
            cache=cache,
        )
    except SnapshotMissingError as exc:
        raise _snapshot_failure(exc) from exc
