"""Report window conventions handed to the report use cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from fleetview.domain.services.time_windows import resolve_timezone
from fleetview.shared.consts import (
    DEFAULT_DAY_BOUNDARY_HOUR,
    DEFAULT_LABEL_FORMAT,
    DEFAULT_RANGE_DAYS,
    DEFAULT_REPORT_TIMEZONE,
)


@dataclass(frozen=True)
class ReportOptions:
    """
    How report days are cut.

    ``day_boundary_hour`` is the local hour at which a preset report day
    starts (0 for midnight-to-midnight days).
    """

    day_boundary_hour: int = DEFAULT_DAY_BOUNDARY_HOUR
    timezone: str = DEFAULT_REPORT_TIMEZONE
    label_format: str = DEFAULT_LABEL_FORMAT
    default_range_days: int = DEFAULT_RANGE_DAYS
    max_range_days: int = 366

    @property
    def tz(self) -> tzinfo:
        return resolve_timezone(self.timezone)
