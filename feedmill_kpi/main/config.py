"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Values come from environment variables, a ``.env`` file and the defaults
below.
"""

from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedmill_kpi.shared import EnumEnvironment, EnumLogFormat, EnumLogLevel


class DatabaseSettings(BaseSettings):
    """Record store (MongoDB) configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/feedmill",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="feedmill", description="Database holding the record collections"
    )
    ensure_indexes: bool = Field(
        default=False,
        description="Create the query indexes at startup (needs write access)",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class ServiceSettings(BaseSettings):
    """HTTP service configuration settings."""

    title: str = Field(default="Feed-Mill KPI Engine", description="API title")
    description: str = Field(
        default="Operational KPIs of a feed-milling plant computed from "
        "plant-floor records",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("SERVICE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("SERVICE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: Optional[EnumLogFormat] = Field(
        default=None,
        description="Renderer (console or json); None picks by environment",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class EngineSettings(BaseSettings):
    """KPI engine parameters."""

    default_start: date = Field(
        default=date(2025, 10, 1), description="Window start when none is given"
    )
    default_end: date = Field(
        default=date(2025, 10, 7), description="Window end when none is given"
    )
    main_meter_id: str = Field(
        default="EM-MAIN", description="Energy meter measuring the whole plant"
    )
    query_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Deadline of a single record store query"
    )
    max_concurrency: int = Field(
        default=4, ge=1, description="Calculators running at the same time"
    )
    sample_interval_minutes: float = Field(
        default=5.0, gt=0, description="Cadence of process and line state samples"
    )
    stability_band_c: float = Field(
        default=2.0, ge=0, description="Allowed |PV - SP| for a stable sample, degC"
    )
    trailing_days: int = Field(
        default=7, ge=1, description="Look-back of silo consumption and events"
    )
    consumption_floor_t: float = Field(
        default=0.001, gt=0, description="Minimum daily consumption, t/day"
    )
    pareto_limit: int = Field(default=10, ge=1, description="Downtime causes listed")

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_", case_sensitive=False, extra="ignore"
    )

    @model_validator(mode="after")
    def _check_default_window(self) -> "EngineSettings":
        if self.default_end < self.default_start:
            raise ValueError("default_end must not be before default_start")
        return self


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Patched in tests to provide settings for a given environment.
    """
    return AppSettings()
