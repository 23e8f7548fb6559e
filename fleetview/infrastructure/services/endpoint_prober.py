"""
Infrastructure Service - Endpoint Prober

Checks that the telemetry APIs answer over HTTP. An endpoint is probed on
a list of candidate paths until one of them does not report it down.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from time import perf_counter
from typing import Optional, Sequence, Tuple

import httpx

from fleetview.domain.entities.health import (
    CacheStats,
    EndpointHealth,
    FleetHealth,
    ProbeAttempt,
    ServiceStatus,
)
from fleetview.domain.ports.report_cache import IReportCache
from fleetview.shared import get_logger

logger = get_logger(__name__)

# The runtime-report endpoint only accepts POST; a 405 to a GET proves it is served.
METHOD_NOT_ALLOWED = 405


@dataclass(frozen=True)
class ProbeTarget:
    name: str
    base_url: str
    paths: Tuple[str, ...] = ("",)


def join_url(base_url: str, path: str) -> str:
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def classify(status_code: int) -> ServiceStatus:
    if status_code >= 500:
        return ServiceStatus.DOWN
    if status_code == METHOD_NOT_ALLOWED:
        return ServiceStatus.UP
    if status_code >= 400:
        return ServiceStatus.DEGRADED
    return ServiceStatus.UP


class HttpEndpointProber:
    """Health probe over HTTP, with an optional report cache snapshot."""

    def __init__(
        self,
        targets: Sequence[ProbeTarget],
        report_cache: Optional[IReportCache] = None,
        http_timeout: float = 5.0,
    ) -> None:
        self._targets = list(targets)
        self._cache = report_cache
        self._http_timeout = http_timeout

    @classmethod
    def for_telemetry(
        cls,
        runtime_report_url: str,
        trends_api_url: str,
        report_cache: Optional[IReportCache] = None,
        http_timeout: float = 5.0,
    ) -> "HttpEndpointProber":
        """Probe the runtime-report endpoint and the trends API."""
        targets = [
            ProbeTarget("runtime_report", runtime_report_url),
            ProbeTarget("trends_api", trends_api_url, ("/latest", "/")),
        ]
        return cls(targets, report_cache=report_cache, http_timeout=http_timeout)

    async def probe(self) -> FleetHealth:
        endpoints = list(
            await asyncio.gather(*(self._probe_target(t) for t in self._targets))
        )
        status = ServiceStatus.worst(endpoint.status for endpoint in endpoints)

        cache = None
        if self._cache is not None:
            cache = CacheStats(
                samples=self._cache.sample_count, queries=self._cache.query_count
            )

        logger.debug("health.probed", status=status.value, endpoints=len(endpoints))
        return FleetHealth(status=status, endpoints=endpoints, cache=cache)

    async def _probe_target(self, target: ProbeTarget) -> EndpointHealth:
        if not target.base_url:
            return EndpointHealth(name=target.name, status=ServiceStatus.UNKNOWN)

        attempts = []
        for path in target.paths:
            attempt = await self._attempt(join_url(target.base_url, path))
            attempts.append(attempt)
            if attempt.status != ServiceStatus.DOWN:
                break

        return EndpointHealth(
            name=target.name, status=attempts[-1].status, attempts=attempts
        )

    async def _attempt(self, url: str) -> ProbeAttempt:
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            logger.warning("health.probe_failed", url=url, error=str(exc))
            return ProbeAttempt(
                url=url,
                status=ServiceStatus.DOWN,
                latency_ms=(perf_counter() - start) * 1000,
                error=f"HTTP request failed: {exc}",
            )

        return ProbeAttempt(
            url=url,
            status=classify(response.status_code),
            status_code=response.status_code,
            latency_ms=(perf_counter() - start) * 1000,
        )
