"""DTOs for the nine KPI sections returned by the dashboard endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from feedmill_kpi.shared.consts import EnumCalculator


class _KpiDTO(BaseModel):
    """Base for DTOs built from the frozen domain result records."""

    @classmethod
    def from_domain(cls, result: Any) -> "_KpiDTO":
        return cls.model_validate(asdict(result))


class ProductionTotalsDTO(_KpiDTO):
    actual_tons: Optional[float] = Field(description="Produced tons")
    planned_tons: Optional[float] = Field(description="Planned tons")
    plan_attainment_pct: Optional[float] = Field(
        description="Actual over planned, in %"
    )


class LineProductionDTO(ProductionTotalsDTO):
    line: str = Field(description="Production line identifier")


class ProductionDTO(_KpiDTO):
    summary: ProductionTotalsDTO
    by_line: List[LineProductionDTO] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "summary": {
                    "actual_tons": 9.0,
                    "planned_tons": 10.0,
                    "plan_attainment_pct": 90.0,
                },
                "by_line": [
                    {
                        "line": "L1",
                        "actual_tons": 9.0,
                        "planned_tons": 10.0,
                        "plan_attainment_pct": 90.0,
                    }
                ],
            }
        },
    )


class DemandPointDTO(_KpiDTO):
    timestamp: datetime
    demand_kw: Optional[float]


class EnergyDTO(_KpiDTO):
    sec_kwh_per_t: Optional[float] = Field(
        description="Specific energy consumption of the main meter, kWh/t"
    )
    trend: List[DemandPointDTO] = Field(default_factory=list)


class LineStabilityDTO(_KpiDTO):
    line: str
    sigma: Optional[float] = Field(description="Population std-dev of PV - SP, degC")
    pct_within_2c: Optional[float] = Field(
        description="Share of samples within the stability band, in %"
    )


class SteamDTO(_KpiDTO):
    steam_kg_per_t: Optional[float]
    avg_sp: Optional[float]
    avg_pv: Optional[float]
    sp_vs_pv_pct: Optional[float]
    stability: List[LineStabilityDTO] = Field(default_factory=list)


class LineAvailabilityDTO(_KpiDTO):
    line_id: str
    run_minutes: float
    scheduled_minutes: float
    run_availability_pct: Optional[float]


class AvailabilityDTO(_KpiDTO):
    lines: List[LineAvailabilityDTO] = Field(default_factory=list)


class QualityDTO(_KpiDTO):
    fpy_percent: Optional[float] = Field(description="First-pass yield, in %")
    holds: int
    total_samples: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"fpy_percent": 80.0, "holds": 2, "total_samples": 10}
        },
    )


class ProductAdherenceDTO(_KpiDTO):
    product_code: str
    ingredients: int
    avg_deviation: Optional[float]
    worst_deviation: Optional[float]
    compliance_pct: Optional[float]
    worst_ingredient: Optional[str]


class RecipeAdherenceDTO(_KpiDTO):
    products: List[ProductAdherenceDTO] = Field(default_factory=list)


class MaterialCoverDTO(_KpiDTO):
    material_code: str
    inventory_t: float
    level_pct: Optional[float]
    avg_daily_t: float
    days_of_cover: float


class SiloEventCountsDTO(_KpiDTO):
    low_level_count: int
    changeover_count: int


class SilosDTO(_KpiDTO):
    doc: List[MaterialCoverDTO] = Field(default_factory=list)
    events: SiloEventCountsDTO


class DowntimeCauseDTO(_KpiDTO):
    reason: str
    total_min: float


class ReliabilityDTO(_KpiDTO):
    downtime_pct: Optional[float]
    pareto: List[DowntimeCauseDTO] = Field(default_factory=list)


class PackagingDTO(_KpiDTO):
    total_bags: Optional[int]
    rework_percent: Optional[float]
    avg_bag_weight: Optional[float]


SECTION_DTOS: Dict[EnumCalculator, Type[_KpiDTO]] = {
    EnumCalculator.PRODUCTION: ProductionDTO,
    EnumCalculator.ENERGY: EnergyDTO,
    EnumCalculator.STEAM: SteamDTO,
    EnumCalculator.AVAILABILITY: AvailabilityDTO,
    EnumCalculator.QUALITY: QualityDTO,
    EnumCalculator.RECIPE: RecipeAdherenceDTO,
    EnumCalculator.SILOS: SilosDTO,
    EnumCalculator.RELIABILITY: ReliabilityDTO,
    EnumCalculator.PACKAGING: PackagingDTO,
}
