"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Optional

from feedmill_kpi.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from feedmill_kpi.domain.ports.health_check import IHealthCheckService
from feedmill_kpi.infrastructure.database.mongo_database import MongoDatabase


class HealthCheckService(IHealthCheckService):
    """Ping the MongoDB deployment holding the record streams."""

    def __init__(
        self, mongo_database: Optional[MongoDatabase], *, timeout: float = 5.0
    ) -> None:
        self._mongo_database = mongo_database
        self._timeout = timeout

    async def evaluate(self) -> SystemHealth:
        mongo = await self._check_mongo()
        return SystemHealth(status=mongo.status, dependencies=[mongo])

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._mongo_database.client.admin.command, "ping"),
                timeout=self._timeout,
            )
        except Exception as exc:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc!r}",
                latency_ms=(perf_counter() - start) * 1000,
            )

        return DependencyStatus(
            name="mongo",
            status=ServiceStatus.UP,
            message="MongoDB ping successful",
            latency_ms=(perf_counter() - start) * 1000,
            details={"database": self._mongo_database.db.name},
        )
