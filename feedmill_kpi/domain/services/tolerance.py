"""Dosing tolerance bands for recipe adherence."""

from typing import Tuple

# (code prefix, tolerance in % of target); first match wins
TOLERANCE_BANDS: Tuple[Tuple[str, float], ...] = (
    ("RM-", 0.5),
    ("LIQ-", 0.6),
)
DEFAULT_TOLERANCE_PCT = 1.0


def tolerance_for(ingredient_code: str) -> float:
    """Return the allowed absolute deviation (%) for an ingredient code."""
    for prefix, tolerance in TOLERANCE_BANDS:
        if ingredient_code.startswith(prefix):
            return tolerance
    return DEFAULT_TOLERANCE_PCT
