"""Specific energy consumption and demand trend."""

from __future__ import annotations

import asyncio

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import DemandPoint, EnergyKpis
from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    round_half_up,
    safe_ratio,
    sum_or_none,
)
from feedmill_kpi.shared.consts import EnumCalculator


class EnergyCalculator(MetricCalculator):
    """SEC (kWh/t) of the main meter and its raw 15-minute demand series."""

    name = EnumCalculator.ENERGY

    async def compute(self, window: TimeWindow) -> EnergyKpis:
        tons, readings = await asyncio.gather(
            self._production_tons(window),
            self._fetch(
                RecordStream.ENERGY_READINGS,
                window,
                {"meter_id": self._options.main_meter_id},
            ),
        )

        kwh = sum_or_none(reading.kwh for reading in readings)
        trend = tuple(
            DemandPoint(timestamp=reading.timestamp, demand_kw=reading.kw)
            for reading in sorted(readings, key=lambda reading: reading.timestamp)
        )
        return EnergyKpis(
            sec_kwh_per_t=round_half_up(safe_ratio(kwh, tons, metric="sec_kwh_per_t"), 2),
            trend=trend,
        )
