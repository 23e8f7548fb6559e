from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from fleetview.application.dtos.trends_dto import DisplaySettingsUpdateDTO
from fleetview.application.models.tag_registry import (
    TagSettingsRegistry,
    build_tag_catalog,
)
from fleetview.application.use_cases.trend_view_use_cases import (
    GetLatestReadingUseCase,
    GetTagsUseCase,
    GetTrendHistoryUseCase,
    ToggleTagUseCase,
    UpdateTagSettingsUseCase,
)
from fleetview.domain.entities.errors import TelemetryGatewayError
from fleetview.presentation.controllers.trends_controller import (
    get_latest_reading,
    get_tags,
    get_trend_history,
    toggle_tag,
    update_tag_settings,
)

START = datetime(2024, 5, 1, tzinfo=timezone.utc)
END = datetime(2024, 5, 2, tzinfo=timezone.utc)


class _FailingTrendsGateway:
    async def get_latest(self):
        raise TelemetryGatewayError("Trends API request failed")

    async def get_history(self, start, end, tags, aggregation=None):
        raise TelemetryGatewayError("Trends API request failed")


@pytest.fixture()
def registry() -> TagSettingsRegistry:
    return TagSettingsRegistry(build_tag_catalog(1))


@pytest.mark.asyncio
async def test_toggle_and_list(registry) -> None:
    await toggle_tag(tag="Forklift1_Speed", toggle_tag_use_case=ToggleTagUseCase(registry))
    dto = await get_tags(get_tags_use_case=GetTagsUseCase(registry))

    assert dto.selected == ["Forklift1_Speed"]


@pytest.mark.asyncio
async def test_unknown_tag_is_404(registry) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await toggle_tag(tag="Nope", toggle_tag_use_case=ToggleTagUseCase(registry))
    assert exc_info.value.status_code == 404

    with pytest.raises(HTTPException) as exc_info:
        await update_tag_settings(
            tag="Nope",
            update=DisplaySettingsUpdateDTO(color="#fff"),
            update_use_case=UpdateTagSettingsUseCase(registry),
        )
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_gateway_failures_are_502(registry) -> None:
    gateway = _FailingTrendsGateway()

    with pytest.raises(HTTPException) as exc_info:
        await get_latest_reading(
            latest_use_case=GetLatestReadingUseCase(gateway, registry)
        )
    assert exc_info.value.status_code == 502

    with pytest.raises(HTTPException) as exc_info:
        await get_trend_history(
            start=START,
            end=END,
            tags=["Forklift1_Speed"],
            aggregation=None,
            history_use_case=GetTrendHistoryUseCase(gateway, registry),
        )
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_history_input_errors_are_422(registry) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_trend_history(
            start=END,
            end=START,
            tags=["Forklift1_Speed"],
            aggregation=None,
            history_use_case=GetTrendHistoryUseCase(_FailingTrendsGateway(), registry),
        )

    assert exc_info.value.status_code == 422


@pytest.mark.asyncio
async def test_history_accepts_naive_and_aware_bounds_together(registry) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_trend_history(
            start=datetime(2024, 5, 3),
            end=END,
            tags=["Forklift1_Speed"],
            aggregation=None,
            history_use_case=GetTrendHistoryUseCase(_FailingTrendsGateway(), registry),
        )

    assert exc_info.value.status_code == 422
