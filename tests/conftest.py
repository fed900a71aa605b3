import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Ensure the project root is importable so `planner.*`, `core.*` and `db.*` resolve
_PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(_PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(_PROJECT_DIR))

# Settings are read once on first import, so the test environment is set first
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("DB_ECHO", "false")
os.environ.setdefault("CATALOG_CACHE_PURGE_ENABLED", "false")

from planner.main import create_app  # noqa: E402


@pytest.fixture()
def app() -> FastAPI:
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def async_client(app: FastAPI):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# Lightweight fallback for pytest-mock's 'mocker' fixture when the plugin isn't loaded
@pytest.fixture()
def mocker():
    from unittest.mock import (
        AsyncMock,
        create_autospec as _create_autospec,
        MagicMock,
        Mock,
        patch,
    )

    class _SimpleMocker:
        def __init__(self):
            self._patchers: list = []
            self.AsyncMock = AsyncMock
            self.MagicMock = MagicMock
            self.Mock = Mock
            self.create_autospec = _create_autospec

        def patch(self, target: str, *args, **kwargs):
            p = patch(target, *args, **kwargs)
            mocked = p.start()
            self._patchers.append(p)
            return mocked

    m = _SimpleMocker()
    try:
        yield m
    finally:
        for p in reversed(m._patchers):
            p.stop()
