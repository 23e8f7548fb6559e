"""
Fleet DTOs - Application Layer

DTOs exposing the configured fleet to the presentation layer.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from fleetview.domain.entities.fleet import Entity


class FleetEntityDTO(BaseModel):
    """DTO for one tracked vehicle."""

    entity_id: str = Field(description="Stable identifier used as report column key")
    name: str = Field(description="Display name")
    device_id: Optional[str] = Field(
        default=None, description="Identifier known by the telemetry API"
    )

    @classmethod
    def from_domain(cls, entity: Entity) -> "FleetEntityDTO":
        return cls(
            entity_id=entity.entity_id, name=entity.name, device_id=entity.device_id
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "entity_id": "t5",
                "name": "Forklift T5",
                "device_id": "867512077469365",
            }
        }
    }


class FleetResponseDTO(BaseModel):
    """DTO listing the fleet."""

    count: int = Field(description="Number of vehicles")
    entities: List[FleetEntityDTO] = Field(description="Vehicles in catalog order")
