"""
Domain Layer Package

Core records, result types and business rules of the KPI engine, free of
framework and storage concerns.
"""

from feedmill_kpi.domain import entities, ports, repositories, services

__all__ = ["entities", "ports", "repositories", "services"]
