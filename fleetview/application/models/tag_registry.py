"""Selection and display settings for trend-view tags."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from fleetview.domain.entities.display import DisplaySettings
from fleetview.domain.entities.errors import UnknownEntityError

SPEED_SUFFIX = "_Speed"
VOLTAGE_SUFFIX = "_Voltage"

DEFAULT_PALETTE = (
    "#007bff",
    "#28a745",
    "#dc3545",
    "#ffc107",
    "#17a2b8",
    "#6f42c1",
    "#e83e8c",
    "#fd7e14",
    "#20c997",
    "#6610f2",
)

SPEED_SCALE = 20.0
DEFAULT_SCALE = 50.0
DEFAULT_DIVISIONS = 5


def build_tag_catalog(vehicle_count: int, prefix: str = "Forklift") -> List[str]:
    """Return ``<prefix><i>_Speed`` and ``<prefix><i>_Voltage`` for every vehicle."""
    tags: List[str] = []
    for index in range(1, vehicle_count + 1):
        tags.append(f"{prefix}{index}{SPEED_SUFFIX}")
        tags.append(f"{prefix}{index}{VOLTAGE_SUFFIX}")
    return tags


def is_speed_tag(tag: str) -> bool:
    return tag.endswith(SPEED_SUFFIX)


def is_voltage_tag(tag: str) -> bool:
    return tag.endswith(VOLTAGE_SUFFIX)


class TagSettingsRegistry:
    """
    Tracks which tags are selected and how each one is drawn.

    Settings are created the first time a tag is selected and survive
    deselection. The default color is the palette entry at the tag's
    position in the catalog.
    """

    def __init__(
        self, tags: Sequence[str], palette: Sequence[str] = DEFAULT_PALETTE
    ) -> None:
        self._tags = list(tags)
        self._positions = {tag: index for index, tag in enumerate(self._tags)}
        self._palette = list(palette)
        self._selected: List[str] = []
        self._settings: Dict[str, DisplaySettings] = {}

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    @property
    def selected(self) -> List[str]:
        return list(self._selected)

    def _require(self, tag: str) -> None:
        if tag not in self._positions:
            raise UnknownEntityError([tag])

    def validate(self, tags: Sequence[str]) -> None:
        unknown = [tag for tag in tags if tag not in self._positions]
        if unknown:
            raise UnknownEntityError(unknown)

    def _default_settings(self, tag: str) -> DisplaySettings:
        color = self._palette[self._positions[tag] % len(self._palette)]
        scale = SPEED_SCALE if is_speed_tag(tag) else DEFAULT_SCALE
        return DisplaySettings(color=color, scale=scale, divisions=DEFAULT_DIVISIONS)

    def settings_for(self, tag: str) -> Optional[DisplaySettings]:
        self._require(tag)
        return self._settings.get(tag)

    def toggle(self, tag: str) -> bool:
        """Flip the selection of a tag; return True if it is now selected."""
        self._require(tag)
        if tag in self._selected:
            self._selected.remove(tag)
            return False
        self._selected.append(tag)
        self._settings.setdefault(tag, self._default_settings(tag))
        return True

    def update(
        self,
        tag: str,
        *,
        color: Optional[str] = None,
        scale: Optional[float] = None,
        divisions: Optional[int] = None,
    ) -> DisplaySettings:
        self._require(tag)
        settings = self._settings.setdefault(tag, self._default_settings(tag))
        if color is not None:
            settings.color = color
        if scale is not None:
            settings.scale = scale
        if divisions is not None:
            settings.divisions = divisions
        return settings
