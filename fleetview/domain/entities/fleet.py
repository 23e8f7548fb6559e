"""Domain entities for the tracked fleet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Entity:
    """
    A tracked telemetry source such as a forklift.

    ``entity_id`` is the stable token used as report column key and cache
    key. ``device_id`` is the identifier the remote API knows the vehicle
    by (an IMEI for the reference fleet) and falls back to ``entity_id``.
    """

    entity_id: str
    name: str
    device_id: Optional[str] = None

    @property
    def remote_id(self) -> str:
        return self.device_id or self.entity_id
