from __future__ import annotations

from typing import Annotated, TypeAlias

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_db
from planner.services.catalog_cache import CatalogCache, get_catalog_cache

DbDep: TypeAlias = Annotated[AsyncSession, Depends(get_db)]
CatalogCacheDep: TypeAlias = Annotated[CatalogCache, Depends(get_catalog_cache)]
