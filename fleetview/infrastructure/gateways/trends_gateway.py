"""
Infrastructure Gateway - Trends API Implementation

HTTP client for the trends API exposing the latest speed/voltage reading
and historical readings over a date range.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import httpx
import structlog

from fleetview.domain.entities.errors import TelemetryGatewayError
from fleetview.domain.gateways.trends_gateway import ITrendsGateway
from fleetview.infrastructure.gateways.runtime_report_gateway import error_detail

logger = structlog.get_logger(__name__)


class TrendsGateway(ITrendsGateway):
    """Implementation of the trends API gateway using an HTTP client."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        """
        Initialize the trends gateway.

        Args:
            base_url: Base URL of the trends API (e.g., "http://host/api")
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            detail = error_detail(e.response)
            logger.error(
                "trends.http_error",
                status_code=e.response.status_code,
                detail=detail,
                url=url,
            )
            raise TelemetryGatewayError(
                f"Trends API HTTP error {e.response.status_code}: {detail}",
                {"url": url, "status_code": e.response.status_code},
            ) from e

        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error("trends.request_error", error=str(e), url=url)
            raise TelemetryGatewayError(
                f"Trends API request failed: {e}", {"url": url}
            ) from e

        except ValueError as e:
            raise TelemetryGatewayError(
                f"Trends API returned invalid JSON: {e}", {"url": url}
            ) from e

    async def get_latest(self) -> Dict[str, Any]:
        data = await self._get("latest")
        if not isinstance(data, dict):
            raise TelemetryGatewayError("Trends API latest reading is not an object")
        return data

    async def get_history(
        self,
        start: datetime,
        end: datetime,
        tags: Sequence[str],
        aggregation: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            "start": start.isoformat(),
            "end": end.isoformat(),
            "tags": ",".join(tags),
        }
        if aggregation:
            params["aggregation"] = aggregation

        logger.info("trends.history_requested", **params)

        data = await self._get("history", params)
        if not isinstance(data, list):
            raise TelemetryGatewayError("Trends API history payload is not a list")
        return [record for record in data if isinstance(record, dict)]
