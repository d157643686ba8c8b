"""Bagging output and rework."""

from __future__ import annotations

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import PackagingKpis
from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    mean_or_none,
    round_half_up,
    safe_ratio,
    sum_or_none,
)
from feedmill_kpi.shared.consts import EnumCalculator


class PackagingCalculator(MetricCalculator):
    """Bag totals, rework share and mean bag weight of runs inside the window."""

    name = EnumCalculator.PACKAGING

    async def compute(self, window: TimeWindow) -> PackagingKpis:
        started = await self._fetch(RecordStream.BAGGING_RUNS, window)
        runs = [run for run in started if run.end_time < window.end]

        bags = sum_or_none(run.bag_count for run in runs)
        rework = sum_or_none(run.rework_bags for run in runs)
        return PackagingKpis(
            total_bags=None if bags is None else int(bags),
            rework_percent=round_half_up(
                safe_ratio(rework, bags, scale=100.0, metric="rework_percent"), 2
            ),
            avg_bag_weight=round_half_up(
                mean_or_none(run.avg_bag_weight_kg for run in runs), 2
            ),
        )
