"""
Trends Router - Presentation Layer

Endpoints backing the speed/voltage trend view.
"""

from datetime import datetime
from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from fleetview.application.dtos.trends_dto import (
    DisplaySettingsDTO,
    DisplaySettingsUpdateDTO,
    TagsResponseDTO,
    TelemetryPointDTO,
    TrendHistoryDTO,
)
from fleetview.application.use_cases.trend_view_use_cases import (
    GetLatestReadingUseCase,
    GetTagsUseCase,
    GetTrendHistoryUseCase,
    ToggleTagUseCase,
    UpdateTagSettingsUseCase,
)
from fleetview.domain.entities.errors import (
    EmptySelectionError,
    InvalidRangeError,
    TelemetryGatewayError,
    UnknownEntityError,
)
from fleetview.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/trends", tags=["Trends"])


@router.get("/tags", response_model=TagsResponseDTO)
@inject
async def get_tags(
    get_tags_use_case: GetTagsUseCase = Depends(Provide["get_tags_use_case"]),
) -> TagsResponseDTO:
    """List every tag with its selection state and display settings."""
    return await get_tags_use_case.execute()


@router.post("/tags/{tag}/toggle", response_model=TagsResponseDTO)
@inject
async def toggle_tag(
    tag: str,
    toggle_tag_use_case: ToggleTagUseCase = Depends(Provide["toggle_tag_use_case"]),
) -> TagsResponseDTO:
    """Select or deselect a tag."""
    try:
        return await toggle_tag_use_case.execute(tag)
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)


@router.patch("/tags/{tag}/settings", response_model=DisplaySettingsDTO)
@inject
async def update_tag_settings(
    tag: str,
    update: DisplaySettingsUpdateDTO,
    update_use_case: UpdateTagSettingsUseCase = Depends(
        Provide["update_tag_settings_use_case"]
    ),
) -> DisplaySettingsDTO:
    """Change the color, scale or divisions of a tag."""
    try:
        return await update_use_case.execute(tag, update)
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)


@router.get("/latest", response_model=TelemetryPointDTO)
@inject
async def get_latest_reading(
    latest_use_case: GetLatestReadingUseCase = Depends(
        Provide["get_latest_reading_use_case"]
    ),
) -> TelemetryPointDTO:
    """Return the latest speed/voltage reading spread over every tag."""
    try:
        return await latest_use_case.execute()
    except TelemetryGatewayError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)


@router.get("/history", response_model=TrendHistoryDTO)
@inject
async def get_trend_history(
    start: datetime = Query(description="History start (ISO8601)"),
    end: datetime = Query(description="History end (ISO8601)"),
    tags: Optional[List[str]] = Query(
        default=None, description="Tags to load; the selected tags if omitted"
    ),
    aggregation: Optional[str] = Query(
        default=None, description="Aggregation label, e.g. 1min, 5min, 1hr"
    ),
    history_use_case: GetTrendHistoryUseCase = Depends(
        Provide["get_trend_history_use_case"]
    ),
) -> TrendHistoryDTO:
    """Load historical readings for the requested tags."""
    try:
        return await history_use_case.execute(start, end, tags, aggregation)
    except (InvalidRangeError, EmptySelectionError) as exc:
        raise HTTPException(status_code=422, detail=exc.message)
    except UnknownEntityError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    except TelemetryGatewayError as exc:
        logger.error("trends.history.failed", error=exc.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
