"""
Report DTOs - Application Layer

Data Transfer Objects for runtime report queries and their results.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from fleetview.application.dtos.fleet_dto import FleetEntityDTO
from fleetview.domain.entities.fleet import Entity
from fleetview.domain.entities.report import (
    CustomRange,
    FailedCell,
    PresetRange,
    RangeSelector,
    ReportRow,
    RuntimeReport,
    TrendModel,
)


class RuntimeReportRequestDTO(BaseModel):
    """Query for a runtime report."""

    entity_ids: Optional[List[str]] = Field(
        default=None,
        description="Entities to report on (report columns); whole fleet if omitted",
    )
    selected: Optional[List[str]] = Field(
        default=None,
        description="Entities averaged into the trend line; all columns if omitted",
    )
    days: Optional[int] = Field(
        default=None, description="Preset range: number of report days ending today"
    )
    start: Optional[datetime] = Field(
        default=None, description="Custom range start (inclusive)"
    )
    end: Optional[datetime] = Field(
        default=None, description="Custom range end (exclusive)"
    )
    aggregation: Optional[str] = Field(
        default=None,
        description="Aggregation label forwarded unmodified to the telemetry API",
    )
    include_trend: bool = Field(
        default=True, description="Attach average and trend values to rows"
    )

    @model_validator(mode="after")
    def _check_range_fields(self) -> "RuntimeReportRequestDTO":
        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must be provided together")
        if self.days is not None and self.start is not None:
            raise ValueError("use either days or start/end, not both")
        return self

    def to_selector(self, default_days: int) -> RangeSelector:
        if self.start is not None and self.end is not None:
            return CustomRange(start=self.start, end=self.end)
        return PresetRange(days=self.days if self.days is not None else default_days)

    model_config = {
        "json_schema_extra": {
            "example": {
                "entity_ids": ["t5", "t9"],
                "days": 7,
                "aggregation": "1hr",
                "include_trend": True,
            }
        }
    }


class ReportRowDTO(BaseModel):
    """One report line."""

    label: str = Field(description="Window label (report day)")
    window_start: datetime = Field(description="Window start (inclusive)")
    window_end: datetime = Field(description="Window end (exclusive)")
    values: Dict[str, float] = Field(description="Running hours per entity id")
    average: Optional[float] = Field(
        default=None, description="Mean over selected entities"
    )
    trend: Optional[float] = Field(default=None, description="Fitted trend value")

    @classmethod
    def from_domain(cls, row: ReportRow) -> "ReportRowDTO":
        return cls(
            label=row.label,
            window_start=row.window_start,
            window_end=row.window_end,
            values=dict(row.values),
            average=row.average,
            trend=row.trend,
        )


class TrendModelDTO(BaseModel):
    """Slope/intercept of the trend line."""

    slope: float
    intercept: float

    @classmethod
    def from_domain(cls, model: TrendModel) -> "TrendModelDTO":
        return cls(slope=model.slope, intercept=model.intercept)


class FailedCellDTO(BaseModel):
    """A cell that could not be fetched and was reported as zero."""

    entity_id: str
    label: str
    window_start: datetime
    error: str

    @classmethod
    def from_domain(cls, cell: FailedCell) -> "FailedCellDTO":
        return cls(
            entity_id=cell.entity_id,
            label=cell.label,
            window_start=cell.window_start,
            error=cell.error,
        )


class RuntimeReportDTO(BaseModel):
    """Runtime report returned to callers."""

    query_key: str = Field(description="Range selector cache key")
    cycle: int = Field(description="Query cycle token")
    entities: List[FleetEntityDTO] = Field(description="Report columns")
    selected: List[str] = Field(description="Entities contributing to the trend")
    rows: List[ReportRowDTO] = Field(default_factory=list)
    trend: Optional[TrendModelDTO] = None
    failed_cells: List[FailedCellDTO] = Field(default_factory=list)
    total_cells: int = Field(default=0, description="Cells resolved this cycle")
    from_cache: bool = Field(default=False, description="Served from query cache")
    superseded: bool = Field(
        default=False, description="A newer query cycle started before this one ended"
    )
    all_failed: bool = Field(
        default=False, description="Every fetched cell failed (no data found)"
    )

    @classmethod
    def from_domain(
        cls, report: RuntimeReport, entities: List[Entity]
    ) -> "RuntimeReportDTO":
        return cls(
            query_key=report.query_key,
            cycle=report.cycle,
            entities=[FleetEntityDTO.from_domain(entity) for entity in entities],
            selected=list(report.selected),
            rows=[ReportRowDTO.from_domain(row) for row in report.rows],
            trend=TrendModelDTO.from_domain(report.trend) if report.trend else None,
            failed_cells=[FailedCellDTO.from_domain(c) for c in report.failed_cells],
            total_cells=report.total_cells,
            from_cache=report.from_cache,
            superseded=report.superseded,
            all_failed=report.all_failed,
        )
