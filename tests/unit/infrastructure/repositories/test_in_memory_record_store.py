from __future__ import annotations

import pytest

from feedmill_kpi.domain.entities.errors import DataSourceUnavailableError
from feedmill_kpi.domain.entities.records import (
    Batch,
    Order,
    RecordStream,
    Silo,
    SiloLevelSample,
)
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.infrastructure.repositories import InMemoryRecordStore
from feedmill_kpi.infrastructure.repositories.record_mapper import to_record
from tests.conftest import utc


@pytest.mark.asyncio
async def test_fetch_filters_window_and_sorts() -> None:
    store = InMemoryRecordStore(
        {
            RecordStream.ORDERS: [
                Order("L2", utc(3, 6), utc(3, 8)),
                Order("L1", utc(2, 6), utc(2, 8)),
                Order("L1", utc(8), utc(8, 2)),
                Order("L1", utc(1), utc(1, 2)),
            ]
        }
    )

    orders = await store.fetch(RecordStream.ORDERS, TimeWindow(utc(1), utc(8)))

    assert [order.start_time for order in orders] == [utc(1), utc(2, 6), utc(3, 6)]


@pytest.mark.asyncio
async def test_fetch_with_filters() -> None:
    store = InMemoryRecordStore(
        {
            RecordStream.ORDERS: [
                Order("L2", utc(3, 6), utc(3, 8)),
                Order("L1", utc(2, 6), utc(2, 8)),
            ]
        }
    )

    orders = await store.fetch(RecordStream.ORDERS, filters={"line": "L2"})

    assert orders == [Order("L2", utc(3, 6), utc(3, 8))]


@pytest.mark.asyncio
async def test_unloaded_stream_is_unavailable() -> None:
    store = InMemoryRecordStore()

    with pytest.raises(DataSourceUnavailableError) as exc_info:
        await store.fetch(RecordStream.BATCHES)

    assert "stream not loaded" in exc_info.value.message


@pytest.mark.asyncio
async def test_fetch_latest_per_key() -> None:
    store = InMemoryRecordStore(
        {
            RecordStream.SILO_LEVELS: [
                SiloLevelSample("S2", utc(3, 6), 8.0, 30.0),
                SiloLevelSample("S1", utc(3, 7), 5.0, 20.0),
                SiloLevelSample("S1", utc(3, 6), 6.0, 25.0),
            ]
        }
    )

    latest = await store.fetch_latest(RecordStream.SILO_LEVELS, "silo_id")

    assert latest == [
        SiloLevelSample("S1", utc(3, 7), 5.0, 20.0),
        SiloLevelSample("S2", utc(3, 6), 8.0, 30.0),
    ]


@pytest.mark.asyncio
async def test_fetch_latest_requires_a_timed_stream() -> None:
    store = InMemoryRecordStore({RecordStream.SILOS: [Silo("S1", "RM-CORN")]})

    with pytest.raises(ValueError):
        await store.fetch_latest(RecordStream.SILOS, "silo_id")


@pytest.mark.asyncio
async def test_from_documents_maps_records() -> None:
    store = InMemoryRecordStore.from_documents(
        {
            "batches": [
                {
                    "_id": "abc",
                    "batch_id": "B1",
                    "line": "L1",
                    "product_code": "P1",
                    "start_time": utc(2, 6),
                    "batch_size_actual_kg": 9000.0,
                }
            ],
            "silos": [{"silo_id": "S1", "material_code": "RM-CORN"}],
        }
    )

    batches = await store.fetch(RecordStream.BATCHES)

    assert batches == [Batch("B1", "L1", "P1", utc(2, 6), None, 9000.0)]
    assert await store.fetch(RecordStream.SILOS) == [Silo("S1", "RM-CORN")]


def test_to_record_ignores_unknown_keys() -> None:
    record = to_record(
        RecordStream.ORDERS,
        {"_id": 1, "line": "L1", "start_time": utc(2), "end_time": utc(3), "extra": True},
    )
    assert record == Order("L1", utc(2), utc(3))
