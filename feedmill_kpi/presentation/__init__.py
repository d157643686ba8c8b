"""
Presentation Layer Package

HTTP surface of the KPI engine.
"""

from feedmill_kpi.presentation import controllers

__all__ = ["controllers"]
