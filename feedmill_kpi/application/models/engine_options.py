"""Lightweight settings structures consumed by the application layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineOptions:
    """Subset of configuration that parameterises the metric calculators."""

    main_meter_id: str = "EM-MAIN"
    query_timeout_seconds: float = 10.0
    max_concurrency: int = 4
    sample_interval_minutes: float = 5.0
    stability_band_c: float = 2.0
    trailing_days: int = 7
    consumption_floor_t: float = 0.001
    pareto_limit: int = 10
