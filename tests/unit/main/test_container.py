from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date

import pytest
from dependency_injector import providers

from feedmill_kpi.application.use_cases.dashboard_use_cases import ComputeDashboardUseCase
from feedmill_kpi.main.config import AppSettings, DatabaseSettings, EngineSettings
from feedmill_kpi.main.container import app_lifespan, get_container, init_container
from feedmill_kpi.shared.consts import EnumCalculator
from tests.conftest import FakeMongoDatabase


@dataclass
class _StubMongoDatabase:
    ensured_indexes: bool = False
    closed: bool = False

    async def create_indexes(self) -> None:
        self.ensured_indexes = True

    def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_init_and_get_container() -> None:
    settings = AppSettings()
    container = init_container(settings)
    assert hasattr(container, "mongo_database")
    assert get_container() is container

    stub_db = _StubMongoDatabase()
    container.mongo_database.override(providers.Object(stub_db))

    async with app_lifespan():
        pass


@pytest.mark.asyncio
async def test_app_lifespan_manages_resources() -> None:
    container = init_container(
        AppSettings(database=DatabaseSettings(ensure_indexes=True))
    )
    stub_db = _StubMongoDatabase()
    container.mongo_database.override(providers.Object(stub_db))

    async with app_lifespan():
        await asyncio.sleep(0)

    assert stub_db.ensured_indexes is True
    assert stub_db.closed is True


@pytest.mark.asyncio
async def test_app_lifespan_skips_indexes_by_default() -> None:
    container = init_container(AppSettings())
    stub_db = _StubMongoDatabase()
    container.mongo_database.override(providers.Object(stub_db))

    async with app_lifespan():
        pass

    assert stub_db.ensured_indexes is False
    assert stub_db.closed is True


@pytest.mark.asyncio
async def test_app_lifespan_starts_with_unreachable_database() -> None:
    settings = AppSettings(
        database=DatabaseSettings(
            mongo_uri="mongodb://127.0.0.1:1/?serverSelectionTimeoutMS=100",
            ensure_indexes=True,
        )
    )
    init_container(settings)

    async with app_lifespan() as container:
        assert container.mongo_database() is not None


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("feedmill_kpi.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()


def test_engine_settings_flow_into_components() -> None:
    settings = AppSettings(
        engine=EngineSettings(
            default_start=date(2025, 9, 1),
            default_end=date(2025, 9, 7),
            main_meter_id="EM-2",
            query_timeout_seconds=2.5,
            max_concurrency=3,
        )
    )
    container = init_container(settings)
    container.mongo_database.override(providers.Object(FakeMongoDatabase()))

    options = container.engine_options()
    assert options.main_meter_id == "EM-2"
    assert options.query_timeout_seconds == 2.5
    assert container.record_store().max_time_ms == 2500

    window = container.window_resolver().resolve()
    assert window.start.date() == date(2025, 9, 1)
    assert window.end.date() == date(2025, 9, 8)


def test_calculators_cover_every_section() -> None:
    container = init_container(AppSettings())
    container.mongo_database.override(providers.Object(FakeMongoDatabase()))

    names = [calculator.name for calculator in container.calculators()]

    assert names == list(EnumCalculator)
    use_case = container.compute_dashboard_use_case()
    assert isinstance(use_case, ComputeDashboardUseCase)
