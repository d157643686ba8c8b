"""DTOs for the aggregate dashboard report."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from feedmill_kpi.application.dtos.kpi_dto import SECTION_DTOS
from feedmill_kpi.application.models import DashboardReport, SectionOutcome, SectionStatus
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.shared.consts import EnumCalculator


class WindowDTO(BaseModel):
    start: datetime = Field(description="Inclusive window start (UTC)")
    end: datetime = Field(description="Exclusive window end (UTC)")

    @classmethod
    def from_domain(cls, window: TimeWindow) -> "WindowDTO":
        return cls(start=window.start, end=window.end)


class SectionErrorDTO(BaseModel):
    code: str = Field(description="DataSourceUnavailable, DataSourceTimeout or InternalError")
    message: str


class SectionDTO(BaseModel):
    """One KPI section: data when it was computed, the failure reason otherwise."""

    status: SectionStatus
    data: Optional[Dict[str, Any]] = None
    error: Optional[SectionErrorDTO] = None

    @classmethod
    def from_domain(cls, outcome: SectionOutcome) -> "SectionDTO":
        if outcome.ok:
            dto_cls = SECTION_DTOS[EnumCalculator(outcome.name)]
            return cls(
                status=outcome.status,
                data=dto_cls.from_domain(outcome.result).model_dump(),
            )
        return cls(
            status=outcome.status,
            error=SectionErrorDTO(
                code=outcome.error_code or "InternalError",
                message=outcome.error_message or "",
            ),
        )


class DashboardReportDTO(BaseModel):
    window: WindowDTO
    sections: Dict[str, SectionDTO] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, report: DashboardReport) -> "DashboardReportDTO":
        return cls(
            window=WindowDTO.from_domain(report.window),
            sections={
                name: SectionDTO.from_domain(outcome)
                for name, outcome in report.sections.items()
            },
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "window": {
                    "start": "2025-10-01T00:00:00Z",
                    "end": "2025-10-08T00:00:00Z",
                },
                "sections": {
                    "quality": {
                        "status": "ok",
                        "data": {"fpy_percent": 80.0, "holds": 2, "total_samples": 10},
                        "error": None,
                    },
                    "energy": {
                        "status": "error",
                        "data": None,
                        "error": {
                            "code": "DataSourceTimeout",
                            "message": "Query on record stream "
                            "'energy_meters_15min' timed out after 10.0s",
                        },
                    },
                },
            }
        }
    }
