"""Application-level models derived from configuration."""

from .fleet_catalog import FleetCatalog
from .report_options import ReportOptions
from .system_info import SystemInfo
from .tag_registry import TagSettingsRegistry, build_tag_catalog

__all__ = [
    "FleetCatalog",
    "ReportOptions",
    "SystemInfo",
    "TagSettingsRegistry",
    "build_tag_catalog",
]
