"""Use cases behind the /health and /info endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from fleetview.application.dtos.health_dto import ApplicationInfoDTO, FleetHealthDTO
from fleetview.application.models import SystemInfo
from fleetview.domain.entities.health import ApplicationInfo
from fleetview.domain.ports.health_probe import IHealthProbe


def redact_credentials(url: str) -> str:
    """Drop any user:password part from ``url``."""
    parts = urlsplit(url)
    if not (parts.username or parts.password):
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit(parts._replace(netloc=netloc))


class GetHealthStatusUseCase:
    def __init__(self, health_probe: IHealthProbe) -> None:
        self._probe = health_probe

    async def execute(self) -> FleetHealthDTO:
        return FleetHealthDTO.from_domain(await self._probe.probe())


class GetApplicationInfoUseCase:
    """Combine build metadata, uptime, health and a configuration summary."""

    def __init__(self, health_probe: IHealthProbe, system_info: SystemInfo) -> None:
        self._probe = health_probe
        self._info = system_info

    def _settings_summary(self) -> Dict[str, Any]:
        return {
            "telemetry": {
                "runtime_report_url": redact_credentials(self._info.runtime_report_url),
                "trends_api_url": redact_credentials(self._info.trends_api_url),
            },
            "report": {
                "day_boundary_hour": self._info.day_boundary_hour,
                "timezone": self._info.timezone,
            },
            "fleet_size": self._info.fleet_size,
        }

    async def execute(
        self, started_at: Optional[datetime] = None
    ) -> ApplicationInfoDTO:
        health = await self._probe.probe()
        now = datetime.now(timezone.utc)
        started = started_at or now

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            health=health,
            settings=self._settings_summary(),
        )
        return ApplicationInfoDTO.from_domain(info)
