"""
Report Domain Entities

Value objects used while building runtime reports: the range selectors a
caller supplies, the time windows they resolve into, the per-cell metric
samples fetched for every (entity, window) pair and the rows assembled
from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True, slots=True)
class PresetRange:
    """The last ``days`` report days, ending today."""

    days: int

    @property
    def cache_key(self) -> str:
        return f"range_{self.days}"


@dataclass(frozen=True, slots=True)
class CustomRange:
    """An explicit ``[start, end)`` span chosen by the caller."""

    start: datetime
    end: datetime

    @property
    def cache_key(self) -> str:
        return f"custom_{self.start.isoformat()}_{self.end.isoformat()}"


RangeSelector = Union[PresetRange, CustomRange]


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Half-open interval ``[start, end)`` with its display label."""

    start: datetime
    end: datetime
    label: str

    @property
    def duration(self) -> timedelta:
        """Elapsed time, measured in UTC."""
        return self.end.astimezone(timezone.utc) - self.start.astimezone(timezone.utc)

    @property
    def bounds(self) -> Tuple[datetime, datetime]:
        return (self.start, self.end)


@dataclass(frozen=True, slots=True)
class MetricSample:
    """Running hours reported for one entity over one window."""

    entity_id: str
    timestamp: datetime
    value: float
    sample_count: Optional[int] = None

    @classmethod
    def zero(cls, entity_id: str, window: TimeWindow) -> "MetricSample":
        return cls(entity_id=entity_id, timestamp=window.start, value=0.0)


@dataclass(frozen=True, slots=True)
class ReportRow:
    """One report line: a window label plus a value per entity."""

    label: str
    window_start: datetime
    window_end: datetime
    values: Dict[str, float] = field(default_factory=dict)
    average: Optional[float] = None
    trend: Optional[float] = None


@dataclass(frozen=True, slots=True)
class TrendModel:
    """Least-squares line over (row index, cross-entity average)."""

    slope: float
    intercept: float

    def predict(self, index: int) -> float:
        return self.slope * index + self.intercept


@dataclass(frozen=True, slots=True)
class FailedCell:
    """Diagnostic record for a cell whose fetch failed and was zero-filled."""

    entity_id: str
    label: str
    window_start: datetime
    error: str


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Rows of one range query with the failures met while fetching them."""

    rows: List[ReportRow]
    failed_cells: List[FailedCell] = field(default_factory=list)
    total_cells: int = 0

    def for_columns(self, entity_ids: Sequence[str]) -> Tuple[List[FailedCell], int]:
        """Failures and cell total restricted to ``entity_ids``."""
        wanted = set(entity_ids)
        failed = [cell for cell in self.failed_cells if cell.entity_id in wanted]
        return failed, len(self.rows) * len(wanted)


@dataclass(slots=True)
class RuntimeReport:
    """Result of one query cycle."""

    query_key: str
    cycle: int
    entity_ids: List[str]
    selected: List[str]
    rows: List[ReportRow] = field(default_factory=list)
    trend: Optional[TrendModel] = None
    failed_cells: List[FailedCell] = field(default_factory=list)
    total_cells: int = 0
    from_cache: bool = False
    superseded: bool = False

    @property
    def all_failed(self) -> bool:
        return self.total_cells > 0 and len(self.failed_cells) == self.total_cells
