"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector import containers, providers

from feedmill_kpi.application.calculators import (
    AvailabilityCalculator,
    EnergyCalculator,
    PackagingCalculator,
    ProductionCalculator,
    QualityCalculator,
    RecipeAdherenceCalculator,
    ReliabilityCalculator,
    SilosCalculator,
    SteamCalculator,
)
from feedmill_kpi.application.models import EngineOptions
from feedmill_kpi.application.use_cases.dashboard_use_cases import (
    ComputeDashboardUseCase,
    ComputeSectionUseCase,
)
from feedmill_kpi.application.use_cases.health_use_cases import GetHealthStatusUseCase
from feedmill_kpi.domain.services import WindowResolver
from feedmill_kpi.infrastructure.database import MongoDatabase
from feedmill_kpi.infrastructure.repositories import MongoRecordStore
from feedmill_kpi.infrastructure.services import HealthCheckService
from feedmill_kpi.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _seconds_to_ms(seconds: float) -> int:
    return int(seconds * 1000)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    record_store = providers.Singleton(
        MongoRecordStore,
        database=mongo_database,
        max_time_ms=providers.Callable(
            _seconds_to_ms, config.engine.query_timeout_seconds
        ),
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
    )

    # Engine
    engine_options = providers.Singleton(
        EngineOptions,
        main_meter_id=config.engine.main_meter_id,
        query_timeout_seconds=config.engine.query_timeout_seconds,
        max_concurrency=config.engine.max_concurrency,
        sample_interval_minutes=config.engine.sample_interval_minutes,
        stability_band_c=config.engine.stability_band_c,
        trailing_days=config.engine.trailing_days,
        consumption_floor_t=config.engine.consumption_floor_t,
        pareto_limit=config.engine.pareto_limit,
    )

    window_resolver = providers.Singleton(
        WindowResolver,
        default_start=config.engine.default_start,
        default_end=config.engine.default_end,
    )

    production_calculator = providers.Singleton(
        ProductionCalculator, record_store=record_store, options=engine_options
    )
    energy_calculator = providers.Singleton(
        EnergyCalculator, record_store=record_store, options=engine_options
    )
    steam_calculator = providers.Singleton(
        SteamCalculator, record_store=record_store, options=engine_options
    )
    availability_calculator = providers.Singleton(
        AvailabilityCalculator, record_store=record_store, options=engine_options
    )
    quality_calculator = providers.Singleton(
        QualityCalculator, record_store=record_store, options=engine_options
    )
    recipe_calculator = providers.Singleton(
        RecipeAdherenceCalculator, record_store=record_store, options=engine_options
    )
    silos_calculator = providers.Singleton(
        SilosCalculator, record_store=record_store, options=engine_options
    )
    reliability_calculator = providers.Singleton(
        ReliabilityCalculator, record_store=record_store, options=engine_options
    )
    packaging_calculator = providers.Singleton(
        PackagingCalculator, record_store=record_store, options=engine_options
    )

    # Dashboard order
    calculators = providers.List(
        production_calculator,
        energy_calculator,
        steam_calculator,
        availability_calculator,
        quality_calculator,
        recipe_calculator,
        silos_calculator,
        reliability_calculator,
        packaging_calculator,
    )

    # Application (use cases)
    compute_dashboard_use_case = providers.Factory(
        ComputeDashboardUseCase,
        calculators=calculators,
        window_resolver=window_resolver,
        max_concurrency=config.engine.max_concurrency,
    )

    compute_section_use_case = providers.Factory(
        ComputeSectionUseCase,
        calculators=calculators,
        window_resolver=window_resolver,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Optionally ensures the record store indexes on startup and closes the
    MongoDB client on shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        if container.config.database.ensure_indexes():
            logger.info("container.mongo.ensure_indexes")
            await mongo_database.create_indexes()

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.mongo.close")
        mongo_database.close()

        logger.info("container.resources.shutdown")
