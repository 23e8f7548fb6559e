"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .fleet_use_cases import GetFleetUseCase
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .runtime_report_use_cases import (
    GenerateRuntimeReportUseCase,
    RecomputeTrendUseCase,
)
from .trend_view_use_cases import (
    GetLatestReadingUseCase,
    GetTagsUseCase,
    GetTrendHistoryUseCase,
    ToggleTagUseCase,
    UpdateTagSettingsUseCase,
)

__all__ = [
    "GetFleetUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
    "GenerateRuntimeReportUseCase",
    "RecomputeTrendUseCase",
    "GetTagsUseCase",
    "ToggleTagUseCase",
    "UpdateTagSettingsUseCase",
    "GetLatestReadingUseCase",
    "GetTrendHistoryUseCase",
]
