"""
Infrastructure Gateway - Runtime Report Implementation

This module implements the gateway for the runtime-report endpoint, which
answers how long a vehicle was running between two timestamps.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx
import structlog

from fleetview.domain.entities.errors import TelemetryGatewayError
from fleetview.domain.entities.fleet import Entity
from fleetview.domain.entities.report import MetricSample, TimeWindow
from fleetview.domain.gateways.runtime_report_gateway import IRuntimeReportGateway
from fleetview.shared.consts import SECONDS_PER_HOUR

logger = structlog.get_logger(__name__)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string with milliseconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc_value = value.astimezone(timezone.utc)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_detail(response: httpx.Response) -> str:
    """Extract the ``error`` field of a failed response, or its raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text


class RuntimeReportGateway(IRuntimeReportGateway):
    """Implementation of the runtime-report gateway using an HTTP client."""

    def __init__(
        self,
        report_url: str,
        timeout: float = 30.0,
        api_token: Optional[str] = None,
    ):
        """
        Initialize the runtime-report gateway.

        Args:
            report_url: Full URL of the runtime-report endpoint
                (e.g., "https://solvexesapp.com/runtime-report")
            timeout: Request timeout in seconds
            api_token: Optional bearer token sent with every request
        """
        self.report_url = report_url
        self.timeout = timeout
        self.api_token = api_token

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def fetch_running_hours(
        self,
        entity: Entity,
        window: TimeWindow,
        aggregation: Optional[str] = None,
    ) -> MetricSample:
        """POST one (entity, window) query and convert the answer to hours."""

        payload: Dict[str, Any] = {
            "imei": entity.remote_id,
            "startTime": format_timestamp(window.start),
            "endTime": format_timestamp(window.end),
        }
        if aggregation:
            payload["aggregation"] = aggregation

        logger.debug(
            "runtime_report.request",
            url=self.report_url,
            entity_id=entity.entity_id,
            start=payload["startTime"],
            end=payload["endTime"],
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.report_url, json=payload, headers=self._headers()
                )
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            detail = error_detail(e.response)
            logger.warning(
                "runtime_report.http_error",
                status_code=e.response.status_code,
                detail=detail,
                entity_id=entity.entity_id,
            )
            raise TelemetryGatewayError(
                f"Runtime report HTTP error {e.response.status_code}: {detail}",
                {"entity_id": entity.entity_id, "status_code": e.response.status_code},
            ) from e

        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(
                "runtime_report.request_error",
                error=str(e),
                entity_id=entity.entity_id,
            )
            raise TelemetryGatewayError(
                f"Runtime report request failed: {e}",
                {"entity_id": entity.entity_id},
            ) from e

        except ValueError as e:
            raise TelemetryGatewayError(
                f"Runtime report returned invalid JSON: {e}",
                {"entity_id": entity.entity_id},
            ) from e

        return self._parse_report(data, entity, window)

    def _parse_report(
        self, data: Any, entity: Entity, window: TimeWindow
    ) -> MetricSample:
        """
        Convert a runtime-report body into a sample expressed in hours.

        ``running_hours`` wins over ``running_seconds``/``running``, which
        are read as seconds. A body with none of them is a zero sample.
        """
        if not isinstance(data, dict):
            raise TelemetryGatewayError(
                "Runtime report payload is not an object",
                {"entity_id": entity.entity_id},
            )

        try:
            if data.get("running_hours") is not None:
                hours = float(data["running_hours"])
            else:
                seconds = data.get("running_seconds", data.get("running"))
                if seconds is None:
                    logger.info(
                        "runtime_report.no_running_field",
                        entity_id=entity.entity_id,
                        label=window.label,
                    )
                hours = float(seconds) / SECONDS_PER_HOUR if seconds is not None else 0.0

            if not math.isfinite(hours):
                raise ValueError(f"running time is not finite: {hours}")

            count = data.get("count", data.get("samples"))
            sample_count = int(count) if count is not None else None
        except (TypeError, ValueError, OverflowError) as e:
            raise TelemetryGatewayError(
                f"Runtime report payload has non-numeric values: {e}",
                {"entity_id": entity.entity_id, "payload": data},
            ) from e

        return MetricSample(
            entity_id=entity.entity_id,
            timestamp=window.start,
            value=hours,
            sample_count=sample_count,
        )
