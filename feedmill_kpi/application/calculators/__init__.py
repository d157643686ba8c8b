"""
Metric Calculators - Application Layer

One strategy per published KPI section, all sharing the
:class:`MetricCalculator` contract so they can be dispatched uniformly.
"""

from .availability import AvailabilityCalculator
from .base import MetricCalculator
from .energy import EnergyCalculator
from .packaging import PackagingCalculator
from .production import ProductionCalculator
from .quality import QualityCalculator
from .recipe import RecipeAdherenceCalculator
from .reliability import ReliabilityCalculator
from .silos import SilosCalculator
from .steam import SteamCalculator

__all__ = [
    "MetricCalculator",
    "ProductionCalculator",
    "EnergyCalculator",
    "SteamCalculator",
    "AvailabilityCalculator",
    "QualityCalculator",
    "RecipeAdherenceCalculator",
    "SilosCalculator",
    "ReliabilityCalculator",
    "PackagingCalculator",
]
