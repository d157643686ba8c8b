"""
Aggregation primitives shared by the metric calculators.

Null handling follows SQL aggregates: sums and averages skip nulls and are
null over an empty set, while counts are zero.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from statistics import fmean, pstdev
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
K = TypeVar("K")


def round_half_up(value: Optional[float], places: int) -> Optional[float]:
    """Round half away from zero on the shortest decimal form of ``value``."""
    if value is None:
        return None
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def present(values: Iterable[Optional[float]]) -> List[float]:
    return [value for value in values if value is not None]


def sum_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    """Sum the non-null values; ``None`` when there are none."""
    kept = present(values)
    if not kept:
        return None
    return float(sum(kept))


def mean_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    kept = present(values)
    if not kept:
        return None
    return fmean(kept)


def pstdev_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    """Population standard deviation of the non-null values."""
    kept = present(values)
    if not kept:
        return None
    return pstdev(kept)


def safe_ratio(
    numerator: Optional[float],
    denominator: Optional[float],
    *,
    scale: float = 1.0,
    metric: str = "ratio",
) -> Optional[float]:
    """
    Compute ``scale * numerator / denominator``.

    Degenerate inputs (a missing side or a zero denominator) resolve to
    ``None`` and are logged rather than raised.
    """
    if numerator is None or denominator is None or denominator == 0:
        logger.debug(
            "ratio.degenerate",
            metric=metric,
            numerator=numerator,
            denominator=denominator,
        )
        return None
    return scale * numerator / denominator


def group_by(records: Iterable[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group records by key, keeping first-occurrence order of the keys."""
    groups: Dict[K, List[T]] = defaultdict(list)
    for record in records:
        groups[key(record)].append(record)
    return dict(groups)


def latest_per_key(records: Iterable[T], key_field: str, time_field: str) -> List[T]:
    """
    Keep the record with the maximum ``time_field`` for every ``key_field``.

    Single pass over the records with an index keyed by the group value.
    Ties on the timestamp keep the first record seen. Output is ascending by key.
    """
    latest: Dict[Any, T] = {}
    for record in records:
        key = getattr(record, key_field)
        current = latest.get(key)
        if current is None or getattr(record, time_field) > getattr(current, time_field):
            latest[key] = record
    return [latest[key] for key in sorted(latest)]


def duration_minutes(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60.0


def merge_intervals(
    intervals: Iterable[Tuple[datetime, datetime]],
) -> List[Tuple[datetime, datetime]]:
    """Union of half-open intervals as a sorted list of disjoint intervals."""
    merged: List[Tuple[datetime, datetime]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def covered_by(instant: datetime, intervals: Sequence[Tuple[datetime, datetime]]) -> bool:
    """Whether ``instant`` lies in one of the sorted disjoint half-open intervals."""
    for start, end in intervals:
        if instant < start:
            return False
        if instant < end:
            return True
    return False
