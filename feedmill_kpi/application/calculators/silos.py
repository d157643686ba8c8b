"""Silo inventory, days of cover and silo events."""

from __future__ import annotations

import asyncio
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Dict, List, Optional, Sequence

from feedmill_kpi.application.calculators.base import KG_PER_TON, MetricCalculator
from feedmill_kpi.application.models import EngineOptions
from feedmill_kpi.domain.entities.kpis import MaterialCover, SiloEventCounts, SiloKpis
from feedmill_kpi.domain.entities.records import (
    BatchWeighment,
    RecordStream,
    SiloEventType,
    SiloLevelSample,
)
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.repositories.record_store import IRecordStore
from feedmill_kpi.domain.services.aggregation import (
    group_by,
    mean_or_none,
    round_half_up,
    sum_or_none,
)
from feedmill_kpi.shared.consts import EnumCalculator

# Upper bound of the consumption baseline, which is open-ended
OPEN_END = datetime.max.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SilosCalculator(MetricCalculator):
    """
    Days of cover per material.

    Relative to the clock, not to the requested window: consumption is the
    daily average of every weighment since midnight ``trailing_days`` ago,
    inventory is the latest level reading of every silo holding the material
    and events are counted over ``[now - trailing_days, now]``.
    """

    name = EnumCalculator.SILOS

    def __init__(
        self,
        record_store: IRecordStore,
        options: EngineOptions,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(record_store, options)
        self._clock = clock

    async def compute(self, window: TimeWindow) -> SiloKpis:
        now = self._clock()
        trailing = timedelta(days=self._options.trailing_days)
        midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)

        weighments, silos, levels, events = await asyncio.gather(
            self._fetch(
                RecordStream.BATCH_WEIGHMENTS,
                TimeWindow(start=midnight - trailing, end=OPEN_END),
            ),
            self._fetch(RecordStream.SILOS),
            self._fetch_latest(RecordStream.SILO_LEVELS, "silo_id"),
            # events at exactly "now" count
            self._fetch(
                RecordStream.SILO_EVENTS,
                TimeWindow(start=now - trailing, end=now + timedelta(microseconds=1)),
            ),
        )

        daily_use = self._average_daily_use(weighments)
        material_by_silo = {silo.silo_id: silo.material_code.strip() for silo in silos}
        levels_by_material = group_by(
            (level for level in levels if level.silo_id in material_by_silo),
            lambda level: material_by_silo[level.silo_id],
        )

        doc = tuple(
            self._material_cover(material, material_levels, daily_use.get(material))
            for material, material_levels in sorted(levels_by_material.items())
        )
        return SiloKpis(
            doc=doc,
            events=SiloEventCounts(
                low_level_count=sum(
                    1 for e in events if e.event_type == SiloEventType.LOW_LEVEL.value
                ),
                changeover_count=sum(
                    1 for e in events if e.event_type == SiloEventType.CHANGEOVER.value
                ),
            ),
        )

    def _average_daily_use(self, weighments: Sequence[BatchWeighment]) -> Dict[str, float]:
        """Mean tons per day, over the days with weighments, per material."""
        by_material = group_by(weighments, lambda w: w.ingredient_code.strip())
        averages: Dict[str, float] = {}
        for material, rows in by_material.items():
            daily_tons: List[Optional[float]] = []
            for _, day_rows in sorted(group_by(rows, lambda w: w.weigh_time.date()).items()):
                kg = sum_or_none(w.actual_kg for w in day_rows)
                daily_tons.append(None if kg is None else kg / KG_PER_TON)
            average = mean_or_none(daily_tons)
            if average is not None:
                averages[material] = average
        return averages

    def _material_cover(
        self,
        material: str,
        levels: Sequence[SiloLevelSample],
        average_daily_t: Optional[float],
    ) -> MaterialCover:
        floor = self._options.consumption_floor_t
        daily_t = max(average_daily_t if average_daily_t is not None else floor, floor)
        inventory_t = sum(max(level.inventory_t or 0.0, 0.0) for level in levels)
        level_pct = mean_or_none(
            None if level.level_pct is None else max(level.level_pct, 0.0)
            for level in levels
        )
        return MaterialCover(
            material_code=material,
            inventory_t=round_half_up(inventory_t, 2),
            level_pct=round_half_up(level_pct, 1),
            avg_daily_t=round_half_up(daily_t, 3),
            days_of_cover=round_half_up(inventory_t / daily_t, 1),
        )
