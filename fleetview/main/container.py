"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from fleetview.application.models import (
    FleetCatalog,
    ReportOptions,
    SystemInfo,
    TagSettingsRegistry,
    build_tag_catalog,
)
from fleetview.application.use_cases.fleet_use_cases import GetFleetUseCase
from fleetview.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from fleetview.application.use_cases.runtime_report_use_cases import (
    GenerateRuntimeReportUseCase,
    RecomputeTrendUseCase,
)
from fleetview.application.use_cases.trend_view_use_cases import (
    GetLatestReadingUseCase,
    GetTagsUseCase,
    GetTrendHistoryUseCase,
    ToggleTagUseCase,
    UpdateTagSettingsUseCase,
)
from fleetview.infrastructure.cache import InMemoryReportCache
from fleetview.infrastructure.gateways.runtime_report_gateway import (
    RuntimeReportGateway,
)
from fleetview.infrastructure.gateways.trends_gateway import TrendsGateway
from fleetview.infrastructure.services.endpoint_prober import HttpEndpointProber
from fleetview.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    report_cache = providers.Singleton(InMemoryReportCache)

    # Gateways
    runtime_report_gateway = providers.Singleton(
        RuntimeReportGateway,
        report_url=config.telemetry.runtime_report_url,
        timeout=config.telemetry.timeout,
        api_token=config.telemetry.api_token,
    )

    trends_gateway = providers.Singleton(
        TrendsGateway,
        base_url=config.telemetry.trends_api_url,
        timeout=config.telemetry.timeout,
    )

    # Application (models)
    fleet_catalog = providers.Singleton(
        FleetCatalog.from_config,
        config.fleet.entities,
    )

    report_options = providers.Singleton(
        ReportOptions,
        day_boundary_hour=config.report.day_boundary_hour,
        timezone=config.report.timezone,
        label_format=config.report.label_format,
        default_range_days=config.report.default_range_days,
        max_range_days=config.report.max_range_days,
    )

    tag_registry = providers.Singleton(
        TagSettingsRegistry,
        tags=providers.Callable(build_tag_catalog, config.fleet.trend_tag_count),
    )

    # Application (use cases)
    # Singleton: the report engine owns the query cycle state.
    generate_runtime_report_use_case = providers.Singleton(
        GenerateRuntimeReportUseCase,
        runtime_gateway=runtime_report_gateway,
        report_cache=report_cache,
        fleet_catalog=fleet_catalog,
        options=report_options,
    )

    recompute_trend_use_case = providers.Factory(
        RecomputeTrendUseCase,
        report_engine=generate_runtime_report_use_case,
    )

    get_fleet_use_case = providers.Factory(
        GetFleetUseCase,
        fleet_catalog=fleet_catalog,
    )

    get_tags_use_case = providers.Factory(
        GetTagsUseCase,
        tag_registry=tag_registry,
    )

    toggle_tag_use_case = providers.Factory(
        ToggleTagUseCase,
        tag_registry=tag_registry,
    )

    update_tag_settings_use_case = providers.Factory(
        UpdateTagSettingsUseCase,
        tag_registry=tag_registry,
    )

    get_latest_reading_use_case = providers.Factory(
        GetLatestReadingUseCase,
        trends_gateway=trends_gateway,
        tag_registry=tag_registry,
    )

    get_trend_history_use_case = providers.Factory(
        GetTrendHistoryUseCase,
        trends_gateway=trends_gateway,
        tag_registry=tag_registry,
        tz=report_options.provided.tz,
    )

    health_probe = providers.Singleton(
        HttpEndpointProber.for_telemetry,
        runtime_report_url=config.telemetry.runtime_report_url,
        trends_api_url=config.telemetry.trends_api_url,
        report_cache=report_cache,
        http_timeout=config.telemetry.health_timeout,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        runtime_report_url=config.telemetry.runtime_report_url,
        trends_api_url=config.telemetry.trends_api_url,
        day_boundary_hour=config.report.day_boundary_hour,
        timezone=config.report.timezone,
        fleet_size=providers.Callable(len, fleet_catalog),
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_probe=health_probe,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_probe=health_probe,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


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
    Centralized lifecycle management for in-process resources.

    Builds the report cache and the report engine on startup so the first
    request does not pay for it, and drops cached report data on shutdown.
    """
    container = get_container()

    report_cache = container.report_cache()
    fleet_catalog = container.fleet_catalog()

    try:
        container.generate_runtime_report_use_case()
        logger.info(
            "container.resources.initialized",
            fleet_size=len(fleet_catalog),
        )
        yield container

    finally:
        logger.info(
            "container.report_cache.clear",
            samples=report_cache.sample_count,
            queries=report_cache.query_count,
        )
        report_cache.clear()
        logger.info("container.resources.shutdown")
