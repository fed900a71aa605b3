"""Assemble planner responses from the database, the catalog cache and the engine."""

from __future__ import annotations

import datetime as dt
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from core.settings import get_settings
from db.session import AsyncSessionLocal
from planner.core.ordering import order_for
from planner.schemas.resource import Resource, ResourceKind, StockAdjustment
from planner.schemas.timeline import DateWindow, LowestAvailableResponse, TimelineResponse
from planner.schemas.usage import DailyUsage
from planner.services.availability_engine import AvailabilityEngine
from planner.services.catalog_cache import CatalogCache, get_catalog_cache
from planner.services.catalog_service import load_catalog
from planner.services.group_warnings import analyze_group_warnings
from planner.services.ledger_service import load_ledger
from planner.services.project_usage_service import build_project_usage_index
from planner.services.resource_tree_service import build_resource_tree
from planner.services.stock_adjustment_service import load_stock_adjustments
from planner.services.timeline_window import compute_fetch_window


async def get_catalog(
    kind: ResourceKind, cache: CatalogCache | None = None
) -> tuple[Resource, ...]:
    """Return the cached catalog of ``kind``.

    Loads run on their own session because a background refresh can outlive
    the request that triggered it.
    """
    cache = cache or get_catalog_cache()

    async def _load() -> Sequence[Resource]:
        async with AsyncSessionLocal() as session:
            return await load_catalog(session, kind)

    return await cache.get(kind.value, _load)


async def load_adjustments(
    db: AsyncSession, kind: ResourceKind, window: DateWindow
) -> list[StockAdjustment]:
    """Return stock adjustments for equipment; crew stock never changes."""
    if kind is not ResourceKind.EQUIPMENT:
        return []
    return await load_stock_adjustments(db, window)


async def build_timeline(
    db: AsyncSession,
    kind: ResourceKind,
    period: DateWindow,
    visible: DateWindow,
    *,
    owner_id: str | None = None,
    today: dt.date | None = None,
    cache: CatalogCache | None = None,
) -> TimelineResponse:
    """Build the planner grid for one resource kind.

    The ledger is loaded for the stable fetch window around ``today``, widened
    to cover both ``period`` and ``visible``. Cells, lowest availability,
    project usage and warnings are computed over the visible window only.

    Args:
        db: Async SQLAlchemy session used for the ledger.
        kind: Equipment or crew.
        period: Period the user navigated to.
        visible: Days currently on screen.
        owner_id: Optional owner scope for projects.
        today: Anchor day for the fetch window; defaults to today.
        cache: Catalog cache; defaults to the process-wide cache.

    Returns:
        TimelineResponse for the visible window.
    """
    settings = get_settings()
    requested = DateWindow(
        start=min(period.start, visible.start), end=max(period.end, visible.end)
    )
    fetch_window = compute_fetch_window(
        requested, today or dt.date.today(), settings.ledger_buffer_days
    )

    catalog = await get_catalog(kind, cache)
    ledger = await load_ledger(db, kind, fetch_window, owner_id)
    adjustments = await load_adjustments(db, kind, fetch_window)

    engine = AvailabilityEngine(
        catalog, ledger, kind=kind, stock_adjustments=adjustments
    )
    group_order, subgroup_order = order_for(kind)
    groups = build_resource_tree(catalog, group_order, subgroup_order)

    return TimelineResponse(
        kind=kind,
        fetch_window=fetch_window,
        visible_window=visible,
        groups=groups,
        cells=engine.booked_cells(visible),
        lowest_available={
            resource.id: engine.lowest_available(resource.id, visible)
            for resource in catalog
        },
        project_usage=build_project_usage_index(ledger, visible),
        warnings=analyze_group_warnings(groups, engine, visible),
        unknown_resource_ids=engine.unknown_resource_ids(),
    )


async def get_resource_usage(
    db: AsyncSession,
    kind: ResourceKind,
    resource_id: str,
    day: dt.date,
    *,
    owner_id: str | None = None,
    cache: CatalogCache | None = None,
) -> DailyUsage:
    """Return the usage of one resource on one day."""
    catalog = await get_catalog(kind, cache)
    window = DateWindow(start=day, end=day)
    ledger = await load_ledger(db, kind, window, owner_id)
    adjustments = await load_adjustments(db, kind, window)
    engine = AvailabilityEngine(
        catalog, ledger, kind=kind, stock_adjustments=adjustments
    )
    return engine.daily_usage(resource_id, day)


async def get_resource_lowest_available(
    db: AsyncSession,
    kind: ResourceKind,
    resource_id: str,
    window: DateWindow,
    *,
    owner_id: str | None = None,
    cache: CatalogCache | None = None,
) -> LowestAvailableResponse:
    """Return the lowest availability of one resource over ``window``."""
    catalog = await get_catalog(kind, cache)
    ledger = await load_ledger(db, kind, window, owner_id)
    adjustments = await load_adjustments(db, kind, window)
    engine = AvailabilityEngine(
        catalog, ledger, kind=kind, stock_adjustments=adjustments
    )
    return LowestAvailableResponse(
        resource_id=resource_id,
        start=window.start,
        end=window.end,
        lowest_available=engine.lowest_available(resource_id, window),
    )
