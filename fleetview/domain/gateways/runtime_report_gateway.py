"""
Domain Gateway - Runtime Report

This module defines the gateway interface for the remote runtime-report
endpoint that returns how long a vehicle was running within a window.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fleetview.domain.entities.fleet import Entity
from fleetview.domain.entities.report import MetricSample, TimeWindow


class IRuntimeReportGateway(ABC):
    """Interface for the runtime-report gateway."""

    @abstractmethod
    async def fetch_running_hours(
        self,
        entity: Entity,
        window: TimeWindow,
        aggregation: Optional[str] = None,
    ) -> MetricSample:
        """
        Fetch the running time of one entity within one window.

        Args:
            entity: Vehicle to query
            window: Half-open interval to report on
            aggregation: Optional aggregation label forwarded unmodified

        Returns:
            Sample whose value is expressed in hours

        Raises:
            TelemetryGatewayError: When the endpoint fails or answers with
                an unusable payload
        """
        pass
