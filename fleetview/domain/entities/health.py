"""
Health Domain Entities

Results of probing the telemetry endpoints the reports depend on, plus a
snapshot of the in-process report cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    """Availability of one endpoint or of the whole service."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"

    @classmethod
    def worst(cls, statuses: Iterable["ServiceStatus"]) -> "ServiceStatus":
        """Most severe status in ``statuses``; UP when there is none."""
        ranked = set(statuses)
        for status in (cls.DOWN, cls.DEGRADED, cls.UNKNOWN):
            if status in ranked:
                return status
        return cls.UP


@dataclass(frozen=True, slots=True)
class ProbeAttempt:
    """One HTTP request made while probing an endpoint."""

    url: str
    status: ServiceStatus
    status_code: Optional[int] = None
    latency_ms: Optional[float] = None
    error: Optional[str] = None


@dataclass(slots=True)
class EndpointHealth:
    """Outcome of probing one telemetry endpoint, path by path."""

    name: str
    status: ServiceStatus
    attempts: List[ProbeAttempt] = field(default_factory=list)
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def message(self) -> str:
        if not self.attempts:
            return "Endpoint URL not configured"
        last = self.attempts[-1]
        if last.error:
            return last.error
        return f"HTTP {last.status_code}"


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Entry counts of the report cache."""

    samples: int
    queries: int


@dataclass(slots=True)
class FleetHealth:
    """Aggregated health of the service."""

    status: ServiceStatus
    endpoints: List[EndpointHealth] = field(default_factory=list)
    cache: Optional[CacheStats] = None


@dataclass(slots=True)
class ApplicationInfo:
    """Build metadata, uptime and configuration summary served by /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    health: FleetHealth
    settings: Dict[str, Any] = field(default_factory=dict)
