"""
DTOs Package - Application Layer

Pydantic models exchanged between the application and presentation layers.
"""

from .dashboard_dto import DashboardReportDTO, SectionDTO, SectionErrorDTO, WindowDTO
from .health_dto import DependencyStatusDTO, SystemHealthDTO
from .kpi_dto import (
    SECTION_DTOS,
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

__all__ = [
    "SECTION_DTOS",
    "ProductionDTO",
    "EnergyDTO",
    "SteamDTO",
    "AvailabilityDTO",
    "QualityDTO",
    "RecipeAdherenceDTO",
    "SilosDTO",
    "ReliabilityDTO",
    "PackagingDTO",
    "DashboardReportDTO",
    "SectionDTO",
    "SectionErrorDTO",
    "WindowDTO",
    "DependencyStatusDTO",
    "SystemHealthDTO",
]
