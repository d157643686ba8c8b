"""
Domain Entities Package

Plant-floor records, the time window, KPI result records and domain errors.
"""

from .errors import (
    DataSourceTimeoutError,
    DataSourceUnavailableError,
    DomainError,
    InvalidWindowError,
)
from .health import DependencyStatus, ServiceStatus, SystemHealth
from .kpis import (
    AvailabilityKpis,
    DemandPoint,
    DowntimeCause,
    EnergyKpis,
    LineAvailability,
    LineProduction,
    LineStability,
    MaterialCover,
    PackagingKpis,
    ProductAdherence,
    ProductionKpis,
    ProductionTotals,
    QualityKpis,
    RecipeAdherenceKpis,
    ReliabilityKpis,
    SiloEventCounts,
    SiloKpis,
    SteamKpis,
)
from .records import (
    BaggingRun,
    Batch,
    BatchWeighment,
    Disposition,
    DowntimeEvent,
    EnergyReading,
    LineState,
    LineStateSample,
    Order,
    ProcessSample,
    QualityResult,
    RecordStream,
    Silo,
    SiloEvent,
    SiloEventType,
    SiloLevelSample,
)
from .window import TimeWindow

__all__ = [
    "DomainError",
    "InvalidWindowError",
    "DataSourceUnavailableError",
    "DataSourceTimeoutError",
    "ServiceStatus",
    "DependencyStatus",
    "SystemHealth",
    "ProductionKpis",
    "ProductionTotals",
    "LineProduction",
    "EnergyKpis",
    "DemandPoint",
    "SteamKpis",
    "LineStability",
    "AvailabilityKpis",
    "LineAvailability",
    "QualityKpis",
    "RecipeAdherenceKpis",
    "ProductAdherence",
    "SiloKpis",
    "MaterialCover",
    "SiloEventCounts",
    "ReliabilityKpis",
    "DowntimeCause",
    "PackagingKpis",
    "RecordStream",
    "LineState",
    "Disposition",
    "SiloEventType",
    "Batch",
    "BatchWeighment",
    "EnergyReading",
    "ProcessSample",
    "LineStateSample",
    "Order",
    "QualityResult",
    "Silo",
    "SiloLevelSample",
    "SiloEvent",
    "DowntimeEvent",
    "BaggingRun",
    "TimeWindow",
]
