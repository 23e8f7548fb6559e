"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fleetview.domain.services.time_windows import resolve_timezone
from fleetview.shared import EnumEnvironment, EnumLogLevel
from fleetview.shared.consts import (
    DEFAULT_DAY_BOUNDARY_HOUR,
    DEFAULT_LABEL_FORMAT,
    DEFAULT_RANGE_DAYS,
    DEFAULT_REPORT_TIMEZONE,
)
from fleetview.shared.env import load_secret_file_variables

load_secret_file_variables()


class ServiceSettings(BaseSettings):
    """Service identity and server configuration settings."""

    title: str = Field(default="Fleetview", description="Service title")
    description: str = Field(
        default="Runtime reports and telemetry trends for forklift fleets",
        description="Service description",
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
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class TelemetrySettings(BaseSettings):
    """Remote telemetry API configuration settings."""

    runtime_report_url: str = Field(
        default="https://solvexesapp.com/runtime-report",
        description="Runtime-report endpoint URL",
    )
    trends_api_url: str = Field(
        default="http://flaskapi.us-east-1.elasticbeanstalk.com/api",
        description="Base URL of the speed/voltage trends API",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (s)")
    health_timeout: float = Field(
        default=5.0, gt=0, description="Timeout of health probes (s)"
    )
    api_token: Optional[str] = Field(
        default=None, description="Bearer token for the runtime-report endpoint"
    )

    model_config = SettingsConfigDict(
        env_prefix="TELEMETRY_", case_sensitive=False, extra="ignore"
    )


class ReportSettings(BaseSettings):
    """Report window configuration settings."""

    day_boundary_hour: int = Field(
        default=DEFAULT_DAY_BOUNDARY_HOUR,
        ge=0,
        le=23,
        description="Local hour at which a preset report day starts",
    )
    timezone: str = Field(
        default=DEFAULT_REPORT_TIMEZONE, description="IANA timezone of report days"
    )
    label_format: str = Field(
        default=DEFAULT_LABEL_FORMAT, description="strftime format of row labels"
    )
    default_range_days: int = Field(
        default=DEFAULT_RANGE_DAYS,
        ge=1,
        description="Preset range used when none is given",
    )
    max_range_days: int = Field(
        default=366, ge=1, description="Largest number of windows per query"
    )

    model_config = SettingsConfigDict(
        env_prefix="REPORT_", case_sensitive=False, extra="ignore"
    )

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        resolve_timezone(value)
        return value


class FleetEntitySettings(BaseModel):
    """One configured vehicle."""

    entity_id: str = Field(min_length=1)
    name: str
    device_id: Optional[str] = None


DEFAULT_FLEET = [
    FleetEntitySettings(entity_id="t5", name="Forklift T5", device_id="867512077469365"),
    FleetEntitySettings(entity_id="t9", name="Forklift T9", device_id="865931084963206"),
    FleetEntitySettings(entity_id="t7", name="Forklift T7", device_id="865931084970326"),
    FleetEntitySettings(entity_id="d1", name="Forklift D1", device_id="865931084979863"),
    FleetEntitySettings(entity_id="t4", name="Forklift T4", device_id="865931084970615"),
]


class FleetSettings(BaseSettings):
    """Fleet reference data settings."""

    entities: List[FleetEntitySettings] = Field(
        default_factory=lambda: list(DEFAULT_FLEET),
        description="Vehicles available to reports (JSON list in FLEET_ENTITIES)",
    )
    trend_tag_count: int = Field(
        default=10, ge=1, description="Vehicles exposed as speed/voltage tags"
    )

    model_config = SettingsConfigDict(
        env_prefix="FLEET_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    fleet: FleetSettings = Field(default_factory=FleetSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

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

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()


settings = get_settings()
