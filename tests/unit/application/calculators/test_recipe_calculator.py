from __future__ import annotations

import pytest

from feedmill_kpi.application.calculators import RecipeAdherenceCalculator
from feedmill_kpi.domain.entities.kpis import ProductAdherence
from feedmill_kpi.domain.entities.records import Batch, BatchWeighment
from tests.conftest import store_with, utc


def _batches():
    return [
        Batch("B1", "L1", "P-A", utc(2, 6)),
        Batch("B2", "L1", "P-B", utc(3, 6)),
        Batch("B3", "L2", "P-C", utc(3, 7)),
    ]


def _weighments():
    return [
        BatchWeighment("B1", "RM-CORN", utc(2, 6, 1), 100.0, 100.4),
        BatchWeighment("B1", "LIQ-FAT", utc(2, 6, 2), 50.0, 50.5),
        # outside any reporting window; recipe adherence spans the dataset
        BatchWeighment("B1", "PX-VIT", utc(15, 6, 3, month=9), 10.0, 10.05),
        BatchWeighment("B2", "RM-B", utc(3, 6, 1), 100.0, 101.0),
        BatchWeighment("B2", "RM-A", utc(3, 6, 2), 100.0, 99.0),
        BatchWeighment("B2", "RM-C", utc(3, 6, 3), 100.0, None),
        BatchWeighment("B2", "RM-D", utc(3, 6, 4), None, 12.0),
        BatchWeighment("B3", "RM-A", utc(3, 7, 1), 0.0, 3.0),
        BatchWeighment("B9", "RM-A", utc(3, 7, 2), 100.0, 100.0),
    ]


@pytest.mark.asyncio
async def test_adherence_per_product(window, options) -> None:
    store = store_with(batches=_batches(), batch_weighments=_weighments())

    result = await RecipeAdherenceCalculator(store, options).compute(window)

    assert result.products[0] == ProductAdherence(
        product_code="P-A",
        ingredients=3,
        avg_deviation=0.63,
        worst_deviation=1.0,
        compliance_pct=66.7,
        worst_ingredient="LIQ-FAT",
    )


@pytest.mark.asyncio
async def test_products_without_qualifying_weighments_are_omitted(window, options) -> None:
    store = store_with(batches=_batches(), batch_weighments=_weighments())

    result = await RecipeAdherenceCalculator(store, options).compute(window)

    assert [product.product_code for product in result.products] == ["P-A", "P-B"]


@pytest.mark.asyncio
async def test_missing_actual_counts_against_compliance(window, options) -> None:
    store = store_with(batches=_batches(), batch_weighments=_weighments())

    result = await RecipeAdherenceCalculator(store, options).compute(window)

    p_b = result.products[1]
    assert p_b.ingredients == 3
    assert p_b.avg_deviation == 1.0
    assert p_b.worst_deviation == 1.0
    assert p_b.compliance_pct == 0.0


@pytest.mark.asyncio
async def test_worst_ingredient_tie_resolves_to_lowest_code(window, options) -> None:
    store = store_with(batches=_batches(), batch_weighments=_weighments())

    result = await RecipeAdherenceCalculator(store, options).compute(window)

    assert result.products[1].worst_ingredient == "RM-A"


@pytest.mark.asyncio
async def test_worst_ingredient_compares_reported_precision(window, options) -> None:
    weighments = [
        BatchWeighment("B1", "RM-Z", utc(2, 6, 1), 100.0, 101.004),
        BatchWeighment("B1", "RM-Y", utc(2, 6, 2), 100.0, 98.999),
    ]
    store = store_with(batches=_batches(), batch_weighments=weighments)

    result = await RecipeAdherenceCalculator(store, options).compute(window)

    assert result.products[0].worst_ingredient == "RM-Y"


@pytest.mark.asyncio
async def test_empty_dataset(window, options) -> None:
    result = await RecipeAdherenceCalculator(store_with(), options).compute(window)

    assert result.products == ()
