"""
Domain Gateway - Trends API

Interface for the trends API serving live and historical speed/voltage
readings.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence


class ITrendsGateway(ABC):
    """Interface for the trends API gateway."""

    @abstractmethod
    async def get_latest(self) -> Dict[str, Any]:
        """Return the most recent raw reading (``spd``/``volt`` fields)."""
        pass

    @abstractmethod
    async def get_history(
        self,
        start: datetime,
        end: datetime,
        tags: Sequence[str],
        aggregation: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return raw historical records between start and end.

        Raises:
            TelemetryGatewayError: When the request fails
        """
        pass
