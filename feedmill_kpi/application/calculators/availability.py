"""Run availability within scheduled orders."""

from __future__ import annotations

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.domain.entities.kpis import AvailabilityKpis, LineAvailability
from feedmill_kpi.domain.entities.records import LineState, RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.aggregation import (
    covered_by,
    group_by,
    merge_intervals,
    round_half_up,
    safe_ratio,
)
from feedmill_kpi.shared.consts import EnumCalculator


class AvailabilityCalculator(MetricCalculator):
    """
    RUN minutes over scheduled minutes per line.

    Scheduled time is the union of the line's orders starting in the window.
    Only state samples inside that union count; every counted sample weighs
    one sampling interval, in the RUN bucket or not.
    """

    name = EnumCalculator.AVAILABILITY

    async def compute(self, window: TimeWindow) -> AvailabilityKpis:
        orders = await self._fetch(RecordStream.ORDERS, window)
        if not orders:
            return AvailabilityKpis()

        # Orders may end after the window; their tail still counts.
        span = TimeWindow(
            start=min(order.start_time for order in orders),
            end=max(order.end_time for order in orders),
        )
        samples = await self._fetch(RecordStream.LINE_STATES, span)
        samples_by_line = group_by(samples, lambda sample: sample.line)

        interval = self._options.sample_interval_minutes
        lines = []
        for line, line_orders in sorted(group_by(orders, lambda order: order.line).items()):
            schedule = merge_intervals(
                (order.start_time, order.end_time) for order in line_orders
            )
            scheduled = [
                sample
                for sample in samples_by_line.get(line, [])
                if covered_by(sample.timestamp, schedule)
            ]
            run_count = sum(1 for sample in scheduled if sample.state == LineState.RUN.value)
            scheduled_minutes = len(scheduled) * interval
            run_minutes = run_count * interval
            lines.append(
                LineAvailability(
                    line_id=line,
                    run_minutes=run_minutes,
                    scheduled_minutes=scheduled_minutes,
                    run_availability_pct=round_half_up(
                        safe_ratio(
                            run_minutes,
                            scheduled_minutes,
                            scale=100.0,
                            metric="run_availability_pct",
                        ),
                        2,
                    ),
                )
            )
        return AvailabilityKpis(lines=tuple(lines))
