"""Downtime Pareto and downtime share of scheduled time."""

from __future__ import annotations

import asyncio
from typing import Dict, Sequence, Tuple

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import DowntimeCause, ReliabilityKpis
from feedmill_kpi.domain.entities.records import DowntimeEvent, RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    duration_minutes,
    round_half_up,
    safe_ratio,
    sum_or_none,
)
from feedmill_kpi.shared.consts import EnumCalculator


class ReliabilityCalculator(MetricCalculator):
    name = EnumCalculator.RELIABILITY

    async def compute(self, window: TimeWindow) -> ReliabilityKpis:
        events, orders = await asyncio.gather(
            self._fetch(RecordStream.DOWNTIME_EVENTS, window),
            self._fetch(RecordStream.ORDERS, window),
        )

        down_minutes = sum_or_none(
            duration_minutes(event.start_time, event.end_time) for event in events
        )
        scheduled_minutes = sum_or_none(
            duration_minutes(order.start_time, order.end_time) for order in orders
        )
        return ReliabilityKpis(
            downtime_pct=round_half_up(
                safe_ratio(
                    down_minutes, scheduled_minutes, scale=100.0, metric="downtime_pct"
                ),
                3,
            ),
            pareto=pareto(events, self._options.pareto_limit),
        )


def pareto(events: Sequence[DowntimeEvent], limit: int) -> Tuple[DowntimeCause, ...]:
    """
    Top ``limit`` reasons by cumulative minutes, largest first.

    Equal totals keep the order in which the reasons first appear in
    ``events``.
    """
    totals: Dict[str, float] = {}
    for event in sorted(events, key=lambda event: event.start_time):
        minutes = duration_minutes(event.start_time, event.end_time)
        totals[event.reason_code] = totals.get(event.reason_code, 0.0) + minutes

    ranked = sorted(totals.items(), key=lambda item: -item[1])[:limit]
    return tuple(
        DowntimeCause(reason=reason, total_min=round_half_up(total, 2))
        for reason, total in ranked
    )
