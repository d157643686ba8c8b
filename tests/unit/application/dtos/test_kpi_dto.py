from __future__ import annotations

from feedmill_kpi.application.dtos import (
    SECTION_DTOS,
    DashboardReportDTO,
    EnergyDTO,
    ProductionDTO,
    SilosDTO,
)
from feedmill_kpi.application.models import DashboardReport, SectionOutcome, SectionStatus
from feedmill_kpi.domain.entities.kpis import (
    DemandPoint,
    EnergyKpis,
    LineProduction,
    MaterialCover,
    ProductionKpis,
    ProductionTotals,
    SiloEventCounts,
    SiloKpis,
)
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.shared.consts import EnumCalculator
from tests.conftest import utc


def test_every_section_has_a_dto() -> None:
    assert set(SECTION_DTOS) == set(EnumCalculator)


def test_production_dto_keeps_nulls_and_nesting() -> None:
    kpis = ProductionKpis(
        summary=ProductionTotals(0.5, None, None),
        by_line=(LineProduction("L1", 0.5, None, None),),
    )

    dumped = ProductionDTO.from_domain(kpis).model_dump()

    assert dumped == {
        "summary": {"actual_tons": 0.5, "planned_tons": None, "plan_attainment_pct": None},
        "by_line": [
            {
                "actual_tons": 0.5,
                "planned_tons": None,
                "plan_attainment_pct": None,
                "line": "L1",
            }
        ],
    }


def test_energy_dto_trend() -> None:
    dto = EnergyDTO.from_domain(
        EnergyKpis(sec_kwh_per_t=41.27, trend=(DemandPoint(utc(2, 0, 15), 1650.0),))
    )

    assert dto.sec_kwh_per_t == 41.27
    assert dto.trend[0].timestamp == utc(2, 0, 15)
    assert dto.trend[0].demand_kw == 1650.0


def test_silos_dto() -> None:
    dto = SilosDTO.from_domain(
        SiloKpis(
            doc=(MaterialCover("RM-CORN", 20.0, 20.0, 2.0, 10.0),),
            events=SiloEventCounts(low_level_count=2),
        )
    )

    assert dto.doc[0].days_of_cover == 10.0
    assert dto.events.low_level_count == 2
    assert dto.events.changeover_count == 0


def test_dashboard_report_dto_mixes_data_and_errors() -> None:
    report = DashboardReport(
        window=TimeWindow(utc(1), utc(8)),
        sections={
            "energy": SectionOutcome(
                name="energy",
                status=SectionStatus.OK,
                result=EnergyKpis(sec_kwh_per_t=None),
            ),
            "quality": SectionOutcome(
                name="quality",
                status=SectionStatus.ERROR,
                error_code="DataSourceTimeout",
                error_message="too slow",
            ),
        },
    )

    dto = DashboardReportDTO.from_domain(report)

    assert dto.window.end == utc(8)
    assert dto.sections["energy"].data == {"sec_kwh_per_t": None, "trend": []}
    assert dto.sections["energy"].error is None
    assert dto.sections["quality"].data is None
    assert dto.sections["quality"].error.code == "DataSourceTimeout"
    assert dto.model_dump(mode="json")["sections"]["quality"]["status"] == "error"
