"""Lightweight settings structures consumed by the application layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """Subset of configuration required by system-related use cases."""

    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    runtime_report_url: str
    trends_api_url: str
    day_boundary_hour: int
    timezone: str
    fleet_size: int
