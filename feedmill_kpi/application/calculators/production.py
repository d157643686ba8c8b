"""Production vs plan."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from feedmill_kpi.application.calculators.base import KG_PER_TON, MetricCalculator
from feedmill_kpi.domain.entities.kpis import (
    LineProduction,
    ProductionKpis,
    ProductionTotals,
)
from feedmill_kpi.domain.entities.records import Batch, RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    group_by,
    round_half_up,
    safe_ratio,
    sum_or_none,
)
from feedmill_kpi.shared.consts import EnumCalculator


class ProductionCalculator(MetricCalculator):
    """Actual vs planned tons and plan attainment, overall and per line."""

    name = EnumCalculator.PRODUCTION

    async def compute(self, window: TimeWindow) -> ProductionKpis:
        batches = await self._fetch(RecordStream.BATCHES, window)

        actual, planned, attainment = _totals(batches)
        by_line = tuple(
            LineProduction(line, *_totals(line_batches))
            for line, line_batches in sorted(
                group_by(batches, lambda batch: batch.line).items()
            )
        )
        return ProductionKpis(
            summary=ProductionTotals(
                actual_tons=actual,
                planned_tons=planned,
                plan_attainment_pct=attainment,
            ),
            by_line=by_line,
        )


def _totals(
    batches: Sequence[Batch],
) -> Tuple[Optional[float], Optional[float], Optional[float]]:
    actual_kg = sum_or_none(batch.batch_size_actual_kg for batch in batches)
    planned_kg = sum_or_none(batch.batch_size_set_kg for batch in batches)
    return (
        _tons(actual_kg),
        _tons(planned_kg),
        round_half_up(
            safe_ratio(actual_kg, planned_kg, scale=100.0, metric="plan_attainment_pct"),
            2,
        ),
    )


def _tons(kg: Optional[float]) -> Optional[float]:
    return None if kg is None else round_half_up(kg / KG_PER_TON, 2)
