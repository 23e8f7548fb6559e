"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .fleet_dto import FleetEntityDTO, FleetResponseDTO
from .health_dto import (
    ApplicationInfoDTO,
    CacheStatsDTO,
    EndpointHealthDTO,
    FleetHealthDTO,
    ProbeAttemptDTO,
)
from .report_dto import (
    FailedCellDTO,
    ReportRowDTO,
    RuntimeReportDTO,
    RuntimeReportRequestDTO,
    TrendModelDTO,
)
from .trends_dto import (
    DisplaySettingsDTO,
    DisplaySettingsUpdateDTO,
    TagDTO,
    TagsResponseDTO,
    TelemetryPointDTO,
    TrendHistoryDTO,
)

__all__ = [
    "FleetEntityDTO",
    "FleetResponseDTO",
    "FleetHealthDTO",
    "EndpointHealthDTO",
    "ProbeAttemptDTO",
    "CacheStatsDTO",
    "ApplicationInfoDTO",
    "RuntimeReportRequestDTO",
    "RuntimeReportDTO",
    "ReportRowDTO",
    "TrendModelDTO",
    "FailedCellDTO",
    "DisplaySettingsDTO",
    "DisplaySettingsUpdateDTO",
    "TagDTO",
    "TagsResponseDTO",
    "TelemetryPointDTO",
    "TrendHistoryDTO",
]
