"""Port for checking the health of the service's dependencies."""

from __future__ import annotations

from typing import Protocol

from fleetview.domain.entities.health import FleetHealth


class IHealthProbe(Protocol):
    async def probe(self) -> FleetHealth:
        """Probe every dependency and aggregate the result."""
        ...
