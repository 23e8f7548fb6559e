"""
Trend View Use Cases - Application Layer

Use cases behind the speed/voltage trend view: tag selection and display
settings, the latest reading and historical readings.
"""

from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional, Sequence

from fleetview.application.dtos.trends_dto import (
    DisplaySettingsDTO,
    DisplaySettingsUpdateDTO,
    TagDTO,
    TagsResponseDTO,
    TelemetryPointDTO,
    TrendHistoryDTO,
)
from fleetview.application.models.tag_registry import (
    TagSettingsRegistry,
    is_speed_tag,
    is_voltage_tag,
)
from fleetview.domain.entities.errors import EmptySelectionError, InvalidRangeError
from fleetview.domain.entities.telemetry import TelemetryPoint
from fleetview.domain.gateways.trends_gateway import ITrendsGateway
from fleetview.domain.services.time_windows import localize
from fleetview.shared import get_logger

logger = get_logger(__name__)


def _reading(record: Dict[str, Any], field: str) -> float:
    try:
        return float(record.get(field) or 0)
    except (TypeError, ValueError):
        return 0.0


def map_reading(record: Dict[str, Any], tags: Sequence[str]) -> Dict[str, float]:
    """Spread a raw ``spd``/``volt`` reading over speed and voltage tags."""
    values: Dict[str, float] = {}
    for tag in tags:
        if is_speed_tag(tag):
            values[tag] = _reading(record, "spd")
        elif is_voltage_tag(tag):
            values[tag] = _reading(record, "volt")
    return values


def _tags_response(registry: TagSettingsRegistry) -> TagsResponseDTO:
    selected = registry.selected
    tags = []
    for tag in registry.tags:
        settings = registry.settings_for(tag)
        tags.append(
            TagDTO(
                tag=tag,
                selected=tag in selected,
                settings=DisplaySettingsDTO.from_domain(settings) if settings else None,
            )
        )
    return TagsResponseDTO(tags=tags, selected=selected)


class GetTagsUseCase:
    """List every tag with its selection state and settings."""

    def __init__(self, tag_registry: TagSettingsRegistry) -> None:
        self._registry = tag_registry

    async def execute(self) -> TagsResponseDTO:
        return _tags_response(self._registry)


class ToggleTagUseCase:
    """Select or deselect a tag, creating its settings on first selection."""

    def __init__(self, tag_registry: TagSettingsRegistry) -> None:
        self._registry = tag_registry

    async def execute(self, tag: str) -> TagsResponseDTO:
        selected = self._registry.toggle(tag)
        logger.info("trends.tag_toggled", tag=tag, selected=selected)
        return _tags_response(self._registry)


class UpdateTagSettingsUseCase:
    """Change the display settings of one tag."""

    def __init__(self, tag_registry: TagSettingsRegistry) -> None:
        self._registry = tag_registry

    async def execute(
        self, tag: str, update: DisplaySettingsUpdateDTO
    ) -> DisplaySettingsDTO:
        settings = self._registry.update(
            tag, color=update.color, scale=update.scale, divisions=update.divisions
        )
        return DisplaySettingsDTO.from_domain(settings)


class GetLatestReadingUseCase:
    """Fetch the latest reading and map it onto every tag."""

    def __init__(
        self, trends_gateway: ITrendsGateway, tag_registry: TagSettingsRegistry
    ) -> None:
        self._gateway = trends_gateway
        self._registry = tag_registry

    async def execute(self) -> TelemetryPointDTO:
        record = await self._gateway.get_latest()
        point = TelemetryPoint(
            time=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            values=map_reading(record, self._registry.tags),
        )
        return TelemetryPointDTO.from_domain(point)


class GetTrendHistoryUseCase:
    """
    Fetch historical readings for a set of tags.

    Naive bounds are read in ``tz``, so they compare with aware ones.
    """

    def __init__(
        self,
        trends_gateway: ITrendsGateway,
        tag_registry: TagSettingsRegistry,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._gateway = trends_gateway
        self._registry = tag_registry
        self._tz = tz

    async def execute(
        self,
        start: datetime,
        end: datetime,
        tags: Optional[Sequence[str]] = None,
        aggregation: Optional[str] = None,
    ) -> TrendHistoryDTO:
        """
        Raises:
            InvalidRangeError: If end is not after start.
            EmptySelectionError: If no tag is requested nor selected.
            UnknownEntityError: If a tag is not in the catalog.
            TelemetryGatewayError: If the trends API fails.
        """
        start, end = localize(start, self._tz), localize(end, self._tz)
        if end <= start:
            raise InvalidRangeError(
                "History end must be after history start",
                {"start": start.isoformat(), "end": end.isoformat()},
            )
        requested: List[str] = list(tags) if tags else self._registry.selected
        if not requested:
            raise EmptySelectionError("Select at least one tag to load history")
        self._registry.validate(requested)

        records = await self._gateway.get_history(start, end, requested, aggregation)
        points = [
            TelemetryPoint(
                time=str(record.get("time", "")),
                values=map_reading(record, requested),
            )
            for record in records
        ]
        logger.info("trends.history_loaded", points=len(points), tags=requested)

        return TrendHistoryDTO(
            tags=requested,
            aggregation=aggregation,
            points=[TelemetryPointDTO.from_domain(point) for point in points],
            count=len(points),
        )
