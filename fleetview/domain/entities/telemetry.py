"""Domain entities for trend-view telemetry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(slots=True)
class TelemetryPoint:
    """One trend-view sample: the backend time label and a value per tag."""

    time: str
    values: Dict[str, float] = field(default_factory=dict)
