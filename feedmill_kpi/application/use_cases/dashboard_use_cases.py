"""
Application Use Cases - Dashboard

Resolves the caller window and runs the metric calculators against it,
either all at once (isolated, concurrent) or one section at a time.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Sequence

import structlog

from feedmill_kpi.application.calculators.base import MetricCalculator
from feedmill_kpi.application.dtos.dashboard_dto import DashboardReportDTO
from feedmill_kpi.application.dtos.kpi_dto import SECTION_DTOS
from feedmill_kpi.application.models import DashboardReport, SectionOutcome, SectionStatus
from feedmill_kpi.domain.entities.errors import (
    DataSourceTimeoutError,
    DataSourceUnavailableError,
)
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.services.window_resolver import DateInput, WindowResolver
from feedmill_kpi.shared.consts import EnumCalculator

logger = structlog.get_logger(__name__)

INTERNAL_ERROR = "InternalError"


class ComputeDashboardUseCase:
    """
    Compute every KPI section for a window.

    Sections run as concurrent tasks, at most ``max_concurrency`` at a time.
    A failing or timed-out section is reported as an error outcome and never
    cancels its siblings.
    """

    def __init__(
        self,
        calculators: Sequence[MetricCalculator],
        window_resolver: WindowResolver,
        max_concurrency: int = 4,
    ) -> None:
        self._calculators = list(calculators)
        self._window_resolver = window_resolver
        self._max_concurrency = max(1, max_concurrency)

    async def execute(
        self, start: DateInput = None, end: DateInput = None
    ) -> DashboardReportDTO:
        """
        Raises:
            InvalidWindowError: Before any calculator runs
        """
        window = self._window_resolver.resolve(start, end)
        report = await self.run(window)
        return DashboardReportDTO.from_domain(report)

    async def run(self, window: TimeWindow) -> DashboardReport:
        logger.info(
            "dashboard.compute.start",
            window_start=window.start.isoformat(),
            window_end=window.end.isoformat(),
            sections=len(self._calculators),
        )
        semaphore = asyncio.Semaphore(self._max_concurrency)
        tasks = [
            asyncio.create_task(self._run_section(calculator, window, semaphore))
            for calculator in self._calculators
        ]
        outcomes = await asyncio.gather(*tasks)

        failed = [outcome.name for outcome in outcomes if not outcome.ok]
        logger.info("dashboard.compute.done", failed_sections=failed)
        return DashboardReport(
            window=window, sections={outcome.name: outcome for outcome in outcomes}
        )

    async def _run_section(
        self,
        calculator: MetricCalculator,
        window: TimeWindow,
        semaphore: asyncio.Semaphore,
    ) -> SectionOutcome:
        name = calculator.name.value
        async with semaphore:
            with structlog.contextvars.bound_contextvars(calculator=name):
                try:
                    result = await calculator.compute(window)
                except (DataSourceUnavailableError, DataSourceTimeoutError) as exc:
                    logger.warning(
                        "dashboard.section.failed",
                        error_code=exc.code,
                        error=exc.message,
                    )
                    return SectionOutcome(
                        name=name,
                        status=SectionStatus.ERROR,
                        error_code=exc.code,
                        error_message=exc.message,
                    )
                except Exception as exc:
                    logger.error("dashboard.section.crashed", error=str(exc), exc_info=exc)
                    return SectionOutcome(
                        name=name,
                        status=SectionStatus.ERROR,
                        error_code=INTERNAL_ERROR,
                        error_message=str(exc),
                    )

                logger.debug("dashboard.section.computed")
                return SectionOutcome(name=name, status=SectionStatus.OK, result=result)


class ComputeSectionUseCase:
    """Compute a single KPI section; failures propagate to the caller."""

    def __init__(
        self,
        calculators: Sequence[MetricCalculator],
        window_resolver: WindowResolver,
    ) -> None:
        self._calculators: Dict[EnumCalculator, MetricCalculator] = {
            calculator.name: calculator for calculator in calculators
        }
        self._window_resolver = window_resolver

    async def execute(
        self,
        section: EnumCalculator,
        start: DateInput = None,
        end: DateInput = None,
    ):
        """
        Returns:
            The section's DTO (e.g. ``ProductionDTO`` for ``production``)

        Raises:
            InvalidWindowError: When the window cannot be resolved
            DataSourceUnavailableError: When a stream cannot be read
            DataSourceTimeoutError: When a sub-query exceeds its deadline
            KeyError: When no calculator is registered for ``section``
        """
        window = self._window_resolver.resolve(start, end)
        calculator = self._calculators[section]
        with structlog.contextvars.bound_contextvars(calculator=section.value):
            result = await calculator.compute(window)
        return SECTION_DTOS[section].from_domain(result)
