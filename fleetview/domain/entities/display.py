"""Display configuration attached to trend-view tags."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class DisplaySettings:
    """Fixed-shape chart settings for one tag."""

    color: str
    scale: float
    divisions: int
