"""
Feed-Mill KPI Engine

Computes the operational KPIs of a feed-milling plant from raw plant-floor
records over a caller-supplied date window.

Layer Structure:
- Domain: Records, time window, result records, errors and pure aggregation rules
- Application: Metric calculators, dashboard use cases and DTOs
- Infrastructure: Record store implementations (MongoDB, in-memory) and health checks
- Presentation: FastAPI routers
- Shared: Cross-cutting constants and structured logging
- Main: Composition root, settings and application entry point
"""

__version__ = "1.0.0"
