"""
Domain Entities Package

This package contains the core domain entities and errors.
"""

from .display import DisplaySettings
from .errors import (
    DomainError,
    EmptySelectionError,
    InvalidRangeError,
    ReportNotAvailableError,
    TelemetryGatewayError,
    UnknownEntityError,
)
from .fleet import Entity
from .health import (
    ApplicationInfo,
    CacheStats,
    EndpointHealth,
    FleetHealth,
    ProbeAttempt,
    ServiceStatus,
)
from .report import (
    CustomRange,
    FailedCell,
    MetricSample,
    PresetRange,
    RangeSelector,
    QueryResult,
    ReportRow,
    RuntimeReport,
    TimeWindow,
    TrendModel,
)
from .telemetry import TelemetryPoint

__all__ = [
    "Entity",
    "DisplaySettings",
    "TelemetryPoint",
    "PresetRange",
    "CustomRange",
    "RangeSelector",
    "TimeWindow",
    "MetricSample",
    "ReportRow",
    "QueryResult",
    "TrendModel",
    "FailedCell",
    "RuntimeReport",
    "FleetHealth",
    "EndpointHealth",
    "ProbeAttempt",
    "CacheStats",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "InvalidRangeError",
    "EmptySelectionError",
    "UnknownEntityError",
    "ReportNotAvailableError",
    "TelemetryGatewayError",
]
