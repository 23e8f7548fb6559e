"""
Fleet Router - Presentation Layer

This module defines the FastAPI router listing the tracked vehicles.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from fleetview.application.dtos.fleet_dto import FleetResponseDTO
from fleetview.application.use_cases.fleet_use_cases import GetFleetUseCase

router = APIRouter(prefix="/fleet", tags=["Fleet"])


@router.get("/", response_model=FleetResponseDTO)
@inject
async def get_fleet(
    get_fleet_use_case: GetFleetUseCase = Depends(Provide["get_fleet_use_case"]),
) -> FleetResponseDTO:
    """List the vehicles that can appear in reports."""
    return await get_fleet_use_case.execute()
