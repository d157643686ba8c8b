"""
Use Cases Package - Application Layer

Orchestration of the metric calculators for the presentation layer.
"""

from .dashboard_use_cases import ComputeDashboardUseCase, ComputeSectionUseCase
from .health_use_cases import GetHealthStatusUseCase

__all__ = [
    "ComputeDashboardUseCase",
    "ComputeSectionUseCase",
    "GetHealthStatusUseCase",
]
