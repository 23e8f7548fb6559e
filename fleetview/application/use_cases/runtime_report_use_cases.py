"""
Runtime Report Use Cases - Application Layer

This module builds runtime reports: it resolves the requested range into
report windows, fetches the running hours of every (entity, window) cell
through the runtime-report gateway, and shapes the results into rows with
an optional trend overlay.

Fetching goes through the injected report cache at two granularities:
single cells keyed by entity and window boundaries, and whole row sets
keyed by the range selector. Windows are fetched one after the other and
the entities of a window concurrently. A cell that fails to fetch is
reported as zero instead of failing the report.
"""

import asyncio
import itertools
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import structlog

from fleetview.application.dtos.report_dto import (
    RuntimeReportDTO,
    RuntimeReportRequestDTO,
)
from fleetview.application.models.fleet_catalog import FleetCatalog
from fleetview.application.models.report_options import ReportOptions
from fleetview.domain.entities.errors import (
    ReportNotAvailableError,
    TelemetryGatewayError,
)
from fleetview.domain.entities.fleet import Entity
from fleetview.domain.entities.report import (
    FailedCell,
    MetricSample,
    QueryResult,
    RangeSelector,
    ReportRow,
    RuntimeReport,
    TimeWindow,
)
from fleetview.domain.gateways.runtime_report_gateway import IRuntimeReportGateway
from fleetview.domain.ports.report_cache import IReportCache
from fleetview.domain.services.row_assembler import (
    assemble_rows,
    project_rows,
    rows_cover,
)
from fleetview.domain.services.time_windows import resolve_windows
from fleetview.domain.services.trend_estimator import apply_trend
from fleetview.shared import get_logger

logger = get_logger(__name__)

CellResult = Tuple[MetricSample, Optional[str]]


class GenerateRuntimeReportUseCase:
    """
    Report engine shared by every report request of the process.

    Each call takes a new query cycle token. When a newer call starts before
    an older one finishes, the older report is flagged ``superseded`` and
    does not replace the latest published report.
    """

    def __init__(
        self,
        runtime_gateway: IRuntimeReportGateway,
        report_cache: IReportCache,
        fleet_catalog: FleetCatalog,
        options: ReportOptions,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._gateway = runtime_gateway
        self._cache = report_cache
        self._fleet = fleet_catalog
        self._options = options
        self._clock = clock
        self._cycles = itertools.count(1)
        self._latest_cycle = 0
        self._previous_query_key: Optional[str] = None
        self._latest_report: Optional[RuntimeReport] = None

    @property
    def latest_report(self) -> Optional[RuntimeReport]:
        return self._latest_report

    @property
    def fleet(self) -> FleetCatalog:
        return self._fleet

    async def execute(self, request: RuntimeReportRequestDTO) -> RuntimeReportDTO:
        """Run a report query described by a request DTO."""
        selector = request.to_selector(self._options.default_range_days)
        report = await self.run(
            selector,
            entity_ids=request.entity_ids,
            selected=request.selected,
            aggregation=request.aggregation,
            include_trend=request.include_trend,
        )
        return RuntimeReportDTO.from_domain(
            report, self._fleet.resolve(report.entity_ids)
        )

    async def run(
        self,
        selector: RangeSelector,
        *,
        entity_ids: Optional[Sequence[str]] = None,
        selected: Optional[Sequence[str]] = None,
        aggregation: Optional[str] = None,
        include_trend: bool = True,
    ) -> RuntimeReport:
        """
        Run one query cycle.

        Input errors are raised before any network I/O.

        Raises:
            EmptySelectionError: If no entity is selected.
            UnknownEntityError: If an entity id is not part of the fleet.
            InvalidRangeError: If the range is inverted or empty.
        """
        entities = self._fleet.resolve(entity_ids)
        windows = resolve_windows(
            selector,
            boundary_hour=self._options.day_boundary_hour,
            tz=self._options.tz,
            now=self._clock() if self._clock else None,
            label_format=self._options.label_format,
            max_windows=self._options.max_range_days,
        )
        column_ids = [entity.entity_id for entity in entities]
        selected_ids = list(selected) if selected is not None else list(column_ids)
        query_key = selector.cache_key

        cycle = next(self._cycles)
        self._latest_cycle = cycle

        with structlog.contextvars.bound_contextvars(
            query_cycle=cycle, query_key=query_key
        ):
            logger.info(
                "report.cycle_started",
                windows=len(windows),
                entities=column_ids,
                aggregation=aggregation,
            )

            result = self._query_from_cache(query_key, column_ids)
            from_cache = result is not None
            if result is None:
                result = await self._fetch_rows(windows, entities, aggregation)
                self._cache.put_query(query_key, result)
            rows = result.rows
            failed, total_cells = result.for_columns(column_ids)

            superseded = cycle != self._latest_cycle

            report = RuntimeReport(
                query_key=query_key,
                cycle=cycle,
                entity_ids=column_ids,
                selected=selected_ids,
                failed_cells=failed,
                total_cells=total_cells,
                from_cache=from_cache,
                superseded=superseded,
            )
            self._shape(report, rows, include_trend)

            if superseded:
                logger.info("report.cycle_superseded", latest_cycle=self._latest_cycle)
            else:
                self._previous_query_key = query_key
                self._latest_report = report

            logger.info(
                "report.cycle_completed",
                rows=len(report.rows),
                failed_cells=len(failed),
                total_cells=total_cells,
                from_cache=from_cache,
            )
            return report

    def recompute(
        self, selected: Optional[Sequence[str]] = None, include_trend: bool = True
    ) -> RuntimeReport:
        """
        Re-derive average and trend of the latest report for a new selection.

        No data is fetched; the latest report's rows are reused.

        Raises:
            ReportNotAvailableError: If no report has been published yet.
        """
        latest = self._latest_report
        if latest is None:
            raise ReportNotAvailableError()

        report = RuntimeReport(
            query_key=latest.query_key,
            cycle=latest.cycle,
            entity_ids=list(latest.entity_ids),
            selected=list(selected) if selected is not None else list(latest.entity_ids),
            failed_cells=list(latest.failed_cells),
            total_cells=latest.total_cells,
            from_cache=latest.from_cache,
        )
        self._shape(report, latest.rows, include_trend)
        self._latest_report = report
        return report

    def _shape(
        self, report: RuntimeReport, rows: Sequence[ReportRow], include_trend: bool
    ) -> None:
        base_rows = project_rows(rows, report.entity_ids)
        if include_trend:
            report.rows, report.trend = apply_trend(base_rows, report.selected)
        else:
            report.rows, report.trend = base_rows, None

    def _query_from_cache(
        self, query_key: str, column_ids: Sequence[str]
    ) -> Optional[QueryResult]:
        if query_key != self._previous_query_key:
            return None
        cached = self._cache.get_query(query_key)
        if cached is None or not rows_cover(cached.rows, column_ids):
            return None
        logger.debug("report.query_cache_hit")
        return cached

    async def _fetch_rows(
        self,
        windows: Sequence[TimeWindow],
        entities: Sequence[Entity],
        aggregation: Optional[str],
    ) -> QueryResult:
        samples: Dict[Tuple[str, int], MetricSample] = {}
        failed: List[FailedCell] = []

        for index, window in enumerate(windows):
            results = await asyncio.gather(
                *(self._resolve_cell(entity, window, aggregation) for entity in entities)
            )
            for entity, (sample, error) in zip(entities, results):
                samples[(entity.entity_id, index)] = sample
                if error is not None:
                    failed.append(
                        FailedCell(
                            entity_id=entity.entity_id,
                            label=window.label,
                            window_start=window.start,
                            error=error,
                        )
                    )

        rows = assemble_rows(windows, [entity.entity_id for entity in entities], samples)
        return QueryResult(
            rows=rows, failed_cells=failed, total_cells=len(windows) * len(entities)
        )

    async def _resolve_cell(
        self, entity: Entity, window: TimeWindow, aggregation: Optional[str]
    ) -> CellResult:
        cached = self._cache.get_sample(entity.entity_id, window)
        if cached is not None:
            return cached, None

        try:
            sample = await self._gateway.fetch_running_hours(entity, window, aggregation)
        except TelemetryGatewayError as e:
            logger.warning(
                "report.cell_fetch_failed",
                entity_id=entity.entity_id,
                label=window.label,
                error=e.message,
            )
            return MetricSample.zero(entity.entity_id, window), e.message

        self._cache.put_sample(entity.entity_id, window, sample)
        return sample, None


class RecomputeTrendUseCase:
    """Re-apply the trend overlay to the latest report for a new selection."""

    def __init__(self, report_engine: GenerateRuntimeReportUseCase) -> None:
        self._engine = report_engine

    async def execute(
        self, selected: Optional[Sequence[str]] = None, include_trend: bool = True
    ) -> RuntimeReportDTO:
        report = self._engine.recompute(selected, include_trend)
        return RuntimeReportDTO.from_domain(
            report, self._engine.fleet.resolve(report.entity_ids)
        )
