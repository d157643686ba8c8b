"""
Domain Services Package

Pure business rules: aggregation primitives, tolerance bands and window
resolution. Nothing here performs I/O.
"""

from .aggregation import (
    covered_by,
    duration_minutes,
    group_by,
    latest_per_key,
    mean_or_none,
    merge_intervals,
    present,
    pstdev_or_none,
    round_half_up,
    safe_ratio,
    sum_or_none,
)
from .tolerance import DEFAULT_TOLERANCE_PCT, TOLERANCE_BANDS, tolerance_for
from .window_resolver import WindowResolver

__all__ = [
    "covered_by",
    "duration_minutes",
    "group_by",
    "latest_per_key",
    "mean_or_none",
    "merge_intervals",
    "present",
    "pstdev_or_none",
    "round_half_up",
    "safe_ratio",
    "sum_or_none",
    "DEFAULT_TOLERANCE_PCT",
    "TOLERANCE_BANDS",
    "tolerance_for",
    "WindowResolver",
]
