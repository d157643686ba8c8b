from .dashboard import DashboardReport, SectionOutcome, SectionStatus
from .engine_options import EngineOptions

__all__ = ["DashboardReport", "EngineOptions", "SectionOutcome", "SectionStatus"]
