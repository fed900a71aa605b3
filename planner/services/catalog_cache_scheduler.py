from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.settings import get_settings
from planner.core.logging import logger
from planner.services.catalog_cache import get_catalog_cache

_settings = get_settings()
_scheduler: AsyncIOScheduler | None = None


async def _run_catalog_cache_purge_job() -> None:
    """Drop expired catalog cache entries and log how many were removed.

    Returns:
        None.
    """

    purged = get_catalog_cache().purge_expired()
    if purged:
        logger.info("Catalog cache purge removed %d expired entries.", purged)


def start_catalog_cache_scheduler() -> None:
    """Start the periodic catalog cache purge if enabled.

    Returns:
        None.
    """

    global _scheduler
    if _scheduler is not None:
        return

    if not _settings.catalog_cache_purge_enabled:
        logger.info("Catalog cache purge scheduler disabled by settings.")
        return

    _scheduler = AsyncIOScheduler()
    _scheduler.add_job(
        _run_catalog_cache_purge_job,
        trigger=IntervalTrigger(seconds=_settings.catalog_cache_purge_seconds),
        id="catalog_cache_purge",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    _scheduler.start()
    logger.info(
        "Catalog cache purge scheduler started (every %ds).",
        _settings.catalog_cache_purge_seconds,
    )


def shutdown_catalog_cache_scheduler() -> None:
    """Shutdown the catalog cache purge scheduler if it is running.

    Returns:
        None.
    """

    global _scheduler
    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("Catalog cache purge scheduler stopped.")
