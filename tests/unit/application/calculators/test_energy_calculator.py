from __future__ import annotations

import pytest

from feedmill_kpi.application.calculators import EnergyCalculator
from feedmill_kpi.application.models import EngineOptions
from feedmill_kpi.domain.entities.kpis import DemandPoint
from feedmill_kpi.domain.entities.records import Batch, EnergyReading
from tests.conftest import store_with, utc


def _batches():
    return [
        Batch("B1", "L1", "P1", utc(2, 6), 5000.0, 5000.0),
        Batch("B2", "L2", "P1", utc(3, 6), 5000.0, 5000.0),
    ]


def _readings():
    return [
        EnergyReading("EM-MAIN", utc(2, 0, 30), kwh=150.0, kw=600.0),
        EnergyReading("EM-MAIN", utc(2, 0, 15), kwh=100.0, kw=400.0),
        EnergyReading("EM-MAIN", utc(2, 0, 45), kwh=None, kw=None),
        EnergyReading("EM-PELLET", utc(2, 0, 15), kwh=999.0, kw=3996.0),
        EnergyReading("EM-MAIN", utc(9), kwh=500.0, kw=2000.0),
    ]


@pytest.mark.asyncio
async def test_sec_uses_main_meter_only(window, options) -> None:
    store = store_with(batches=_batches(), energy_readings=_readings())

    result = await EnergyCalculator(store, options).compute(window)

    assert result.sec_kwh_per_t == 25.0


@pytest.mark.asyncio
async def test_trend_is_ascending_and_keeps_null_demand(window, options) -> None:
    store = store_with(batches=_batches(), energy_readings=_readings())

    result = await EnergyCalculator(store, options).compute(window)

    assert result.trend == (
        DemandPoint(utc(2, 0, 15), 400.0),
        DemandPoint(utc(2, 0, 30), 600.0),
        DemandPoint(utc(2, 0, 45), None),
    )


@pytest.mark.asyncio
async def test_no_production_gives_null_sec(window, options) -> None:
    store = store_with(energy_readings=_readings())

    result = await EnergyCalculator(store, options).compute(window)

    assert result.sec_kwh_per_t is None
    assert len(result.trend) == 3


@pytest.mark.asyncio
async def test_main_meter_is_configurable(window) -> None:
    store = store_with(batches=_batches(), energy_readings=_readings())

    result = await EnergyCalculator(
        store, EngineOptions(main_meter_id="EM-PELLET")
    ).compute(window)

    assert result.sec_kwh_per_t == 99.9
    assert [point.demand_kw for point in result.trend] == [3996.0]
