"""System endpoints: endpoint health and application info."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, Response, status

from fleetview.application.dtos.health_dto import ApplicationInfoDTO, FleetHealthDTO
from fleetview.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from fleetview.domain.entities.health import ServiceStatus
from fleetview.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=FleetHealthDTO,
    responses={503: {"model": FleetHealthDTO, "description": "An endpoint is down"}},
)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> FleetHealthDTO:
    """Probe the telemetry APIs; 503 when any of them is down."""
    result = await get_health_status_use_case.execute()
    if result.status == ServiceStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning(
            "health.down",
            endpoints=[e.name for e in result.endpoints if e.status == ServiceStatus.DOWN],
        )
    return result


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> ApplicationInfoDTO:
    return await get_application_info_use_case.execute(
        getattr(request.app.state, "started_at", None)
    )
