from __future__ import annotations

import pytest
from fastapi import HTTPException

from feedmill_kpi.application.use_cases.health_use_cases import GetHealthStatusUseCase
from feedmill_kpi.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from feedmill_kpi.presentation.controllers.system_controller import health


class _HealthService:
    def __init__(self, status: ServiceStatus):
        self._health = SystemHealth(
            status=status,
            dependencies=[DependencyStatus(name="mongo", status=status)],
        )

    async def evaluate(self) -> SystemHealth:
        return self._health


class _BrokenHealthService:
    async def evaluate(self) -> SystemHealth:
        raise RuntimeError("evaluation failed")


@pytest.mark.asyncio
async def test_health_endpoint_returns_status():
    dto = await health(
        get_health_status_use_case=GetHealthStatusUseCase(
            _HealthService(ServiceStatus.UP)
        )
    )
    assert dto.status is ServiceStatus.UP
    assert dto.dependencies[0].name == "mongo"


@pytest.mark.asyncio
async def test_health_endpoint_failure_is_service_unavailable():
    with pytest.raises(HTTPException) as exc_info:
        await health(
            get_health_status_use_case=GetHealthStatusUseCase(_BrokenHealthService())
        )
    assert exc_info.value.status_code == 503
