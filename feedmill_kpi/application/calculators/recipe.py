"""Recipe adherence of ingredient weighments."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import ProductAdherence, RecipeAdherenceKpis
from feedmill_kpi.domain.entities.records import BatchWeighment, RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    group_by,
    mean_or_none,
    present,
    round_half_up,
    safe_ratio,
)
from feedmill_kpi.domain.services.tolerance import tolerance_for
from feedmill_kpi.shared.consts import EnumCalculator


@dataclass(frozen=True, slots=True)
class _Deviation:
    product_code: str
    ingredient_code: str
    deviation_pct: Optional[float]
    tolerance_pct: float

    @property
    def abs_deviation(self) -> Optional[float]:
        return None if self.deviation_pct is None else abs(self.deviation_pct)

    @property
    def within_tolerance(self) -> bool:
        return self.abs_deviation is not None and self.abs_deviation <= self.tolerance_pct


class RecipeAdherenceCalculator(MetricCalculator):
    """
    Dosing accuracy per product over the whole dataset.

    The window is ignored: adherence is a property of the recipes in use, not
    of a reporting period. Weighments are joined to their batch to find the
    product and must have a positive target.
    """

    name = EnumCalculator.RECIPE

    async def compute(self, window: TimeWindow) -> RecipeAdherenceKpis:
        weighments, batches = await asyncio.gather(
            self._fetch(RecordStream.BATCH_WEIGHMENTS),
            self._fetch(RecordStream.BATCHES),
        )
        product_by_batch = {batch.batch_id: batch.product_code for batch in batches}

        deviations = [
            _deviation(weighment, product_by_batch[weighment.batch_id])
            for weighment in weighments
            if weighment.batch_id in product_by_batch
            and weighment.target_kg is not None
            and weighment.target_kg > 0
        ]

        products = tuple(
            _product_adherence(product, rows)
            for product, rows in sorted(
                group_by(deviations, lambda row: row.product_code).items()
            )
        )
        return RecipeAdherenceKpis(products=products)


def _deviation(weighment: BatchWeighment, product_code: str) -> _Deviation:
    deviation = None
    if weighment.actual_kg is not None:
        deviation = 100.0 * (weighment.actual_kg - weighment.target_kg) / weighment.target_kg
    return _Deviation(
        product_code=product_code,
        ingredient_code=weighment.ingredient_code,
        deviation_pct=deviation,
        tolerance_pct=tolerance_for(weighment.ingredient_code),
    )


def _product_adherence(product_code: str, rows: Sequence[_Deviation]) -> ProductAdherence:
    magnitudes = present(row.abs_deviation for row in rows)
    within = sum(1 for row in rows if row.within_tolerance)
    return ProductAdherence(
        product_code=product_code,
        ingredients=len({row.ingredient_code for row in rows}),
        avg_deviation=round_half_up(mean_or_none(magnitudes), 2),
        worst_deviation=round_half_up(max(magnitudes), 2) if magnitudes else None,
        compliance_pct=round_half_up(
            safe_ratio(within, len(rows), scale=100.0, metric="compliance_pct"), 1
        ),
        worst_ingredient=worst_ingredient(rows),
    )


def worst_ingredient(rows: Sequence[_Deviation]) -> Optional[str]:
    """
    Ingredient with the highest mean absolute deviation.

    Means are compared at the reported precision (2 decimals); equal means
    resolve to the lowest ingredient code.
    """
    means: Dict[str, float] = {}
    for code, ingredient_rows in group_by(rows, lambda row: row.ingredient_code).items():
        mean = round_half_up(
            mean_or_none(row.abs_deviation for row in ingredient_rows), 2
        )
        if mean is not None:
            means[code] = mean
    if not means:
        return None
    ranked: List[str] = sorted(means, key=lambda code: (-means[code], code))
    return ranked[0]
