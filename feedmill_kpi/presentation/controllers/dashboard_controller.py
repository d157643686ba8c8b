"""
Dashboard Router - Presentation Layer

One endpoint per KPI section plus an aggregate endpoint returning every
section with per-section error isolation.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from feedmill_kpi.application.dtos.dashboard_dto import DashboardReportDTO
from feedmill_kpi.application.dtos.kpi_dto import (
    AvailabilityDTO,
    EnergyDTO,
    PackagingDTO,
    ProductionDTO,
    QualityDTO,
    RecipeAdherenceDTO,
    ReliabilityDTO,
    SilosDTO,
    SteamDTO,
)
from feedmill_kpi.application.use_cases.dashboard_use_cases import (
    ComputeDashboardUseCase,
    ComputeSectionUseCase,
)
from feedmill_kpi.domain.entities.errors import (
    DataSourceTimeoutError,
    DataSourceUnavailableError,
    InvalidWindowError,
)
from feedmill_kpi.shared.consts import EnumCalculator

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])

START_QUERY = Query(None, description="First day of the window (YYYY-MM-DD)")
END_QUERY = Query(None, description="Last day of the window, inclusive (YYYY-MM-DD)")


async def _compute_section(
    section: EnumCalculator,
    start: Optional[str],
    end: Optional[str],
    use_case: ComputeSectionUseCase,
):
    try:
        return await use_case.execute(section, start=start, end=end)
    except InvalidWindowError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DataSourceUnavailableError as e:
        logger.warning("dashboard.section.unavailable", section=section.value, error=e.message)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        )
    except DataSourceTimeoutError as e:
        logger.warning("dashboard.section.timeout", section=section.value, error=e.message)
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=e.message)
    except Exception as e:
        logger.error(
            "Failed to compute dashboard section",
            section=section.value,
            error=str(e),
            exc_info=e,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get("", response_model=DashboardReportDTO)
@inject
async def get_dashboard(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeDashboardUseCase = Depends(Provide["compute_dashboard_use_case"]),
) -> DashboardReportDTO:
    """
    Compute every KPI section for the window.

    A section whose record streams fail is reported with ``status="error"``
    while the other sections still carry their data.
    """
    try:
        return await use_case.execute(start=start, end=end)
    except InvalidWindowError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/production", response_model=ProductionDTO)
@inject
async def get_production(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> ProductionDTO:
    """Production vs plan, overall and by line."""
    return await _compute_section(EnumCalculator.PRODUCTION, start, end, use_case)


@router.get("/energy", response_model=EnergyDTO)
@inject
async def get_energy(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> EnergyDTO:
    """Specific energy consumption and main meter demand trend."""
    return await _compute_section(EnumCalculator.ENERGY, start, end, use_case)


@router.get("/steam", response_model=SteamDTO)
@inject
async def get_steam(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> SteamDTO:
    """Steam per ton and conditioning temperature stability."""
    return await _compute_section(EnumCalculator.STEAM, start, end, use_case)


@router.get("/availability", response_model=AvailabilityDTO)
@inject
async def get_availability(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> AvailabilityDTO:
    return await _compute_section(EnumCalculator.AVAILABILITY, start, end, use_case)


@router.get("/quality", response_model=QualityDTO)
@inject
async def get_quality(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> QualityDTO:
    return await _compute_section(EnumCalculator.QUALITY, start, end, use_case)


@router.get("/recipe", response_model=RecipeAdherenceDTO)
@inject
async def get_recipe_adherence(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> RecipeAdherenceDTO:
    """Recipe adherence per product. Covers the whole dataset; dates only validate."""
    return await _compute_section(EnumCalculator.RECIPE, start, end, use_case)


@router.get("/silos", response_model=SilosDTO)
@inject
async def get_silos(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> SilosDTO:
    """Days of cover and silo events relative to now. Dates only validate."""
    return await _compute_section(EnumCalculator.SILOS, start, end, use_case)


@router.get("/reliability", response_model=ReliabilityDTO)
@inject
async def get_reliability(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> ReliabilityDTO:
    """Downtime Pareto and downtime share of scheduled time."""
    return await _compute_section(EnumCalculator.RELIABILITY, start, end, use_case)


@router.get("/packaging", response_model=PackagingDTO)
@inject
async def get_packaging(
    start: Optional[str] = START_QUERY,
    end: Optional[str] = END_QUERY,
    use_case: ComputeSectionUseCase = Depends(Provide["compute_section_use_case"]),
) -> PackagingDTO:
    return await _compute_section(EnumCalculator.PACKAGING, start, end, use_case)
