"""Steam usage and conditioning temperature control."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import LineStability, SteamKpis
from feedmill_kpi.domain.entities.records import ProcessSample, RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    group_by,
    mean_or_none,
    pstdev_or_none,
    round_half_up,
    safe_ratio,
    sum_or_none,
)
from feedmill_kpi.shared.consts import EnumCalculator

MINUTES_PER_HOUR = 60.0


class SteamCalculator(MetricCalculator):
    """
    Steam per ton and conditioner SP/PV tracking.

    Each process sample holds a flow rate (kg/h) representative of its
    sampling interval, so the steam mass of a sample is
    ``flow * interval_minutes / 60``.
    """

    name = EnumCalculator.STEAM

    async def compute(self, window: TimeWindow) -> SteamKpis:
        tons, samples = await asyncio.gather(
            self._production_tons(window),
            self._fetch(RecordStream.PROCESS_SAMPLES, window),
        )

        flow_sum = sum_or_none(sample.steam_flow_kgph for sample in samples)
        steam_kg = (
            None
            if flow_sum is None
            else flow_sum * self._options.sample_interval_minutes / MINUTES_PER_HOUR
        )

        avg_sp = mean_or_none(sample.cond_temp_sp_c for sample in samples)
        avg_pv = mean_or_none(sample.cond_temp_pv_c for sample in samples)
        spread = None if avg_sp is None or avg_pv is None else avg_pv - avg_sp

        stability = tuple(
            self._line_stability(line, line_samples)
            for line, line_samples in sorted(
                group_by(samples, lambda sample: sample.line).items()
            )
        )

        return SteamKpis(
            steam_kg_per_t=round_half_up(
                safe_ratio(steam_kg, tons, metric="steam_kg_per_t"), 2
            ),
            avg_sp=round_half_up(avg_sp, 2),
            avg_pv=round_half_up(avg_pv, 2),
            sp_vs_pv_pct=round_half_up(
                safe_ratio(spread, avg_sp, scale=100.0, metric="sp_vs_pv_pct"), 2
            ),
            stability=stability,
        )

    def _line_stability(self, line: str, samples: Sequence[ProcessSample]) -> LineStability:
        deviations = [_deviation(sample) for sample in samples]
        band = self._options.stability_band_c
        within = sum(
            1 for deviation in deviations if deviation is not None and abs(deviation) <= band
        )
        return LineStability(
            line=line,
            sigma=round_half_up(pstdev_or_none(deviations), 3),
            pct_within_2c=round_half_up(
                safe_ratio(within, len(samples), scale=100.0, metric="pct_within_2c"), 2
            ),
        )


def _deviation(sample: ProcessSample) -> Optional[float]:
    if sample.cond_temp_pv_c is None or sample.cond_temp_sp_c is None:
        return None
    return sample.cond_temp_pv_c - sample.cond_temp_sp_c
