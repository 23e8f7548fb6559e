from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from fleetview.application.models import FleetCatalog, ReportOptions
from fleetview.domain.entities.errors import TelemetryGatewayError
from fleetview.domain.entities.fleet import Entity
from fleetview.domain.entities.report import MetricSample, TimeWindow
from fleetview.domain.gateways.runtime_report_gateway import IRuntimeReportGateway
from fleetview.infrastructure.cache import InMemoryReportCache

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class StubRuntimeGateway(IRuntimeReportGateway):
    """Returns a fixed number of seconds per entity and records every call."""

    def __init__(
        self,
        seconds: Optional[Dict[str, float]] = None,
        failing: Optional[Set[str]] = None,
    ) -> None:
        self.seconds = seconds or {}
        self.failing = failing or set()
        self.calls: List[Tuple[str, datetime, datetime, Optional[str]]] = []

    async def fetch_running_hours(
        self,
        entity: Entity,
        window: TimeWindow,
        aggregation: Optional[str] = None,
    ) -> MetricSample:
        self.calls.append((entity.entity_id, window.start, window.end, aggregation))
        if entity.entity_id in self.failing:
            raise TelemetryGatewayError(f"HTTP 500 for {entity.entity_id}")
        return MetricSample(
            entity_id=entity.entity_id,
            timestamp=window.start,
            value=self.seconds.get(entity.entity_id, 3600.0) / 3600.0,
        )


@pytest.fixture()
def fleet_entities() -> List[Entity]:
    return [
        Entity(entity_id="t5", name="Forklift T5", device_id="867512077469365"),
        Entity(entity_id="t9", name="Forklift T9", device_id="865931084963206"),
        Entity(entity_id="d1", name="Forklift D1", device_id="865931084979863"),
    ]


@pytest.fixture()
def fleet_catalog(fleet_entities: List[Entity]) -> FleetCatalog:
    return FleetCatalog(fleet_entities)


@pytest.fixture()
def report_options() -> ReportOptions:
    return ReportOptions(day_boundary_hour=6, timezone="UTC", max_range_days=31)


@pytest.fixture()
def report_cache() -> InMemoryReportCache:
    return InMemoryReportCache()


@pytest.fixture()
def stub_gateway() -> StubRuntimeGateway:
    return StubRuntimeGateway()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def gateway_factory():
    return StubRuntimeGateway
