"""
Metric Calculator contract

Every published KPI section is a calculator: an async strategy mapping a time
window to one immutable result record, reading its record streams through the
record store port. Calculators never share state and never write.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, List, Mapping, Optional

import structlog

from feedmill_kpi.application.models import EngineOptions
from feedmill_kpi.domain.entities.errors import DataSourceTimeoutError
from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.repositories.record_store import IRecordStore
from feedmill_kpi.domain.services.aggregation import sum_or_none
from feedmill_kpi.shared.consts import EnumCalculator

logger = structlog.get_logger(__name__)

KG_PER_TON = 1000.0


class MetricCalculator(ABC):
    """Base class for the nine metric calculators."""

    name: EnumCalculator

    def __init__(self, record_store: IRecordStore, options: EngineOptions) -> None:
        self._record_store = record_store
        self._options = options

    @abstractmethod
    async def compute(self, window: TimeWindow) -> Any:
        """
        Compute the result record for a window.

        Raises:
            DataSourceUnavailableError: When one of the streams cannot be read
            DataSourceTimeoutError: When a sub-query exceeds its deadline
        """
        pass

    async def _fetch(
        self,
        stream: RecordStream,
        time_range: Optional[TimeWindow] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Any]:
        return await self._with_deadline(
            stream, self._record_store.fetch(stream, time_range, filters)
        )

    async def _fetch_latest(self, stream: RecordStream, key_field: str) -> List[Any]:
        return await self._with_deadline(
            stream, self._record_store.fetch_latest(stream, key_field)
        )

    async def _production_tons(self, window: TimeWindow) -> Optional[float]:
        """Actual production of the window in tons, unrounded."""
        batches = await self._fetch(RecordStream.BATCHES, window)
        actual_kg = sum_or_none(batch.batch_size_actual_kg for batch in batches)
        return None if actual_kg is None else actual_kg / KG_PER_TON

    async def _with_deadline(self, stream: RecordStream, query: Awaitable[List[Any]]) -> List[Any]:
        timeout = self._options.query_timeout_seconds
        try:
            return await asyncio.wait_for(query, timeout=timeout)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "record_store.query.timeout",
                calculator=self.name.value,
                stream=stream.value,
                timeout_seconds=timeout,
            )
            raise DataSourceTimeoutError(stream.value, timeout) from exc
