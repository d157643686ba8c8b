"""
Domain Entities - KPI result records

Immutable results produced by the metric calculators. Numeric fields are
``None`` when the underlying aggregate is empty or its denominator is zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class ProductionTotals:
    actual_tons: Optional[float]
    planned_tons: Optional[float]
    plan_attainment_pct: Optional[float]


@dataclass(frozen=True, slots=True)
class LineProduction:
    line: str
    actual_tons: Optional[float]
    planned_tons: Optional[float]
    plan_attainment_pct: Optional[float]


@dataclass(frozen=True, slots=True)
class ProductionKpis:
    summary: ProductionTotals
    by_line: Tuple[LineProduction, ...] = ()


@dataclass(frozen=True, slots=True)
class DemandPoint:
    timestamp: datetime
    demand_kw: Optional[float]


@dataclass(frozen=True, slots=True)
class EnergyKpis:
    """Specific energy consumption plus the raw demand trend of the main meter."""

    sec_kwh_per_t: Optional[float]
    trend: Tuple[DemandPoint, ...] = ()


@dataclass(frozen=True, slots=True)
class LineStability:
    line: str
    sigma: Optional[float]
    pct_within_2c: Optional[float]


@dataclass(frozen=True, slots=True)
class SteamKpis:
    steam_kg_per_t: Optional[float]
    avg_sp: Optional[float]
    avg_pv: Optional[float]
    sp_vs_pv_pct: Optional[float]
    stability: Tuple[LineStability, ...] = ()


@dataclass(frozen=True, slots=True)
class LineAvailability:
    line_id: str
    run_minutes: float
    scheduled_minutes: float
    run_availability_pct: Optional[float]


@dataclass(frozen=True, slots=True)
class AvailabilityKpis:
    lines: Tuple[LineAvailability, ...] = ()


@dataclass(frozen=True, slots=True)
class QualityKpis:
    fpy_percent: Optional[float]
    holds: int
    total_samples: int


@dataclass(frozen=True, slots=True)
class ProductAdherence:
    product_code: str
    ingredients: int
    avg_deviation: Optional[float]
    worst_deviation: Optional[float]
    compliance_pct: Optional[float]
    worst_ingredient: Optional[str]


@dataclass(frozen=True, slots=True)
class RecipeAdherenceKpis:
    products: Tuple[ProductAdherence, ...] = ()


@dataclass(frozen=True, slots=True)
class MaterialCover:
    material_code: str
    inventory_t: float
    level_pct: Optional[float]
    avg_daily_t: float
    days_of_cover: float


@dataclass(frozen=True, slots=True)
class SiloEventCounts:
    low_level_count: int = 0
    changeover_count: int = 0


@dataclass(frozen=True, slots=True)
class SiloKpis:
    doc: Tuple[MaterialCover, ...] = ()
    events: SiloEventCounts = field(default_factory=SiloEventCounts)


@dataclass(frozen=True, slots=True)
class DowntimeCause:
    reason: str
    total_min: float


@dataclass(frozen=True, slots=True)
class ReliabilityKpis:
    downtime_pct: Optional[float]
    pareto: Tuple[DowntimeCause, ...] = ()


@dataclass(frozen=True, slots=True)
class PackagingKpis:
    total_bags: Optional[int]
    rework_percent: Optional[float]
    avg_bag_weight: Optional[float]
