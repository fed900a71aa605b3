from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.settings import get_settings
from db.session import engine
from planner.routers.planner import router as planner_router
from planner.services.catalog_cache import get_catalog_cache
from planner.services.catalog_cache_scheduler import (
    shutdown_catalog_cache_scheduler,
    start_catalog_cache_scheduler,
)


settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    start_catalog_cache_scheduler()
    yield
    shutdown_catalog_cache_scheduler()
    await get_catalog_cache().close()
    # Ensure DB connections are cleanly closed on shutdown
    await engine.dispose()


def create_app(allowed_origins: Sequence[str] | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        allowed_origins: Optional list of CORS origins to allow. Defaults to
            ``CORS_ORIGINS`` from the settings.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins or settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(planner_router, prefix="/planner", tags=["planner"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
