"""
Fleet Use Cases - Application Layer

Expose the configured fleet so callers can resolve column keys to names.
"""

from fleetview.application.dtos.fleet_dto import FleetEntityDTO, FleetResponseDTO
from fleetview.application.models.fleet_catalog import FleetCatalog


class GetFleetUseCase:
    """Use case for listing the tracked vehicles."""

    def __init__(self, fleet_catalog: FleetCatalog) -> None:
        self._fleet = fleet_catalog

    async def execute(self) -> FleetResponseDTO:
        entities = [FleetEntityDTO.from_domain(e) for e in self._fleet.entities]
        return FleetResponseDTO(count=len(entities), entities=entities)
