"""Resolution of caller dates into the engine's half-open time window."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from feedmill_kpi.domain.entities.errors import InvalidWindowError
from feedmill_kpi.domain.entities.window import TimeWindow

DateInput = Union[date, str, None]


class WindowResolver:
    """
    Turns optional calendar dates into ``[start 00:00, end + 1 day 00:00)`` UTC.

    Missing bounds fall back to the configured reference week, each bound
    independently.
    """

    def __init__(self, default_start: date, default_end: date) -> None:
        self._default_start = default_start
        self._default_end = default_end

    def resolve(self, start: DateInput = None, end: DateInput = None) -> TimeWindow:
        start_date = self._parse(start, "start") or self._default_start
        end_date = self._parse(end, "end") or self._default_end

        if end_date < start_date:
            raise InvalidWindowError(
                f"End date {end_date.isoformat()} is before start date "
                f"{start_date.isoformat()}",
                {"start": start_date.isoformat(), "end": end_date.isoformat()},
            )

        return TimeWindow(
            start=_midnight_utc(start_date),
            end=_midnight_utc(end_date + timedelta(days=1)),
        )

    @staticmethod
    def _parse(value: DateInput, name: str) -> Optional[date]:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidWindowError(
                f"Invalid {name} date '{value}', expected YYYY-MM-DD",
                {name: value},
            ) from exc


def _midnight_utc(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)
