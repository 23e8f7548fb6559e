"""
Trend-view DTOs - Application Layer

DTOs for tag selection, display settings and speed/voltage readings.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from fleetview.domain.entities.display import DisplaySettings
from fleetview.domain.entities.telemetry import TelemetryPoint


class DisplaySettingsDTO(BaseModel):
    """Chart settings for one tag."""

    color: str = Field(description="Line color")
    scale: float = Field(description="Axis maximum")
    divisions: int = Field(description="Axis divisions")

    @classmethod
    def from_domain(cls, settings: DisplaySettings) -> "DisplaySettingsDTO":
        return cls(
            color=settings.color, scale=settings.scale, divisions=settings.divisions
        )


class DisplaySettingsUpdateDTO(BaseModel):
    """Partial update of a tag's display settings."""

    color: Optional[str] = None
    scale: Optional[float] = Field(default=None, gt=0)
    divisions: Optional[int] = Field(default=None, ge=1)


class TagDTO(BaseModel):
    """A trend-view tag with its selection state."""

    tag: str
    selected: bool
    settings: Optional[DisplaySettingsDTO] = None


class TagsResponseDTO(BaseModel):
    """Every tag in catalog order."""

    tags: List[TagDTO]
    selected: List[str]


class TelemetryPointDTO(BaseModel):
    """One chart point: time label and a value per tag."""

    time: str
    values: Dict[str, float]

    @classmethod
    def from_domain(cls, point: TelemetryPoint) -> "TelemetryPointDTO":
        return cls(time=point.time, values=dict(point.values))


class TrendHistoryDTO(BaseModel):
    """Historical readings for the requested tags."""

    tags: List[str]
    aggregation: Optional[str] = None
    points: List[TelemetryPointDTO] = Field(default_factory=list)
    count: int = 0
