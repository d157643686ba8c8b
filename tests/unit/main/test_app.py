from __future__ import annotations

import pytest
from dependency_injector import providers

from feedmill_kpi.main import app as module_app
from feedmill_kpi.main.app import create_app
from feedmill_kpi.main.container import get_container


class _StubMongoDatabase:
    def __init__(self) -> None:
        self.indexed = False
        self.closed = False

    async def create_indexes(self) -> None:
        self.indexed = True

    def close(self) -> None:
        self.closed = True


def test_create_app_registers_routes() -> None:
    app = create_app()
    paths = {route.path for route in app.routes}

    assert "/health" in paths
    assert "/api/dashboard" in paths
    for section in (
        "production",
        "energy",
        "steam",
        "availability",
        "quality",
        "recipe",
        "silos",
        "reliability",
        "packaging",
    ):
        assert f"/api/dashboard/{section}" in paths


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan(monkeypatch) -> None:
    monkeypatch.setenv("DB_ENSURE_INDEXES", "true")
    app = create_app()
    stub_db = _StubMongoDatabase()
    get_container().mongo_database.override(providers.Object(stub_db))

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None
        assert stub_db.indexed is True

    assert stub_db.closed is True
    assert isinstance(module_app.app, type(app))
