"""First-pass yield."""

from __future__ import annotations

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import QualityKpis
from feedmill_kpi.domain.entities.records import Disposition, RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import round_half_up, safe_ratio
from feedmill_kpi.shared.consts import EnumCalculator


class QualityCalculator(MetricCalculator):
    name = EnumCalculator.QUALITY

    async def compute(self, window: TimeWindow) -> QualityKpis:
        results = await self._fetch(RecordStream.QUALITY_RESULTS, window)

        accepted = sum(1 for r in results if r.disposition == Disposition.ACCEPT.value)
        holds = sum(1 for r in results if r.disposition == Disposition.HOLD.value)
        return QualityKpis(
            fpy_percent=round_half_up(
                safe_ratio(accepted, len(results), scale=100.0, metric="fpy_percent"), 2
            ),
            holds=holds,
            total_samples=len(results),
        )
