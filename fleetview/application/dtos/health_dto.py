"""DTOs for the /health and /info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from fleetview.domain.entities.health import (
    ApplicationInfo,
    CacheStats,
    EndpointHealth,
    FleetHealth,
    ProbeAttempt,
    ServiceStatus,
)


class ProbeAttemptDTO(BaseModel):
    url: str
    status: ServiceStatus
    status_code: Optional[int] = None
    latency_ms: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def from_domain(cls, attempt: ProbeAttempt) -> "ProbeAttemptDTO":
        return cls(
            url=attempt.url,
            status=attempt.status,
            status_code=attempt.status_code,
            latency_ms=attempt.latency_ms,
            error=attempt.error,
        )


class EndpointHealthDTO(BaseModel):
    """Probe outcome of one telemetry endpoint."""

    name: str = Field(description="Endpoint identifier")
    status: ServiceStatus = Field(description="Status of the last attempt")
    message: str = Field(description="Human readable outcome")
    checked_at: datetime
    attempts: List[ProbeAttemptDTO] = Field(
        default_factory=list, description="Requests made, in order"
    )

    @classmethod
    def from_domain(cls, endpoint: EndpointHealth) -> "EndpointHealthDTO":
        return cls(
            name=endpoint.name,
            status=endpoint.status,
            message=endpoint.message,
            checked_at=endpoint.checked_at,
            attempts=[ProbeAttemptDTO.from_domain(a) for a in endpoint.attempts],
        )


class CacheStatsDTO(BaseModel):
    samples: int = Field(description="Cached (entity, window) cells")
    queries: int = Field(description="Cached report row sets")

    @classmethod
    def from_domain(cls, stats: CacheStats) -> "CacheStatsDTO":
        return cls(samples=stats.samples, queries=stats.queries)


class FleetHealthDTO(BaseModel):
    """Payload of /health."""

    status: ServiceStatus = Field(description="Worst endpoint status")
    endpoints: List[EndpointHealthDTO] = Field(default_factory=list)
    cache: Optional[CacheStatsDTO] = None

    @classmethod
    def from_domain(cls, health: FleetHealth) -> "FleetHealthDTO":
        return cls(
            status=health.status,
            endpoints=[EndpointHealthDTO.from_domain(e) for e in health.endpoints],
            cache=CacheStatsDTO.from_domain(health.cache) if health.cache else None,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "endpoints": [
                    {
                        "name": "trends_api",
                        "status": "up",
                        "message": "HTTP 200",
                        "checked_at": "2024-03-10T12:00:00Z",
                        "attempts": [
                            {
                                "url": "http://trends.local/api/latest",
                                "status": "up",
                                "status_code": 200,
                                "latency_ms": 42.1,
                            }
                        ],
                    }
                ],
                "cache": {"samples": 70, "queries": 1},
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """Payload of /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float = Field(description="Seconds since startup")
    health: FleetHealthDTO
    settings: Dict[str, Any] = Field(
        default_factory=dict, description="Effective configuration summary"
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            health=FleetHealthDTO.from_domain(info.health),
            settings=info.settings,
        )
