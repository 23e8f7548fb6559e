"""In-process report cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

from fleetview.domain.entities.report import MetricSample, QueryResult, TimeWindow
from fleetview.domain.ports.report_cache import IReportCache

CellKey = Tuple[str, datetime, datetime]


@dataclass
class InMemoryReportCache(IReportCache):
    """
    Dict-backed cache living for the whole process.

    There is no eviction and no lock: the key space is bounded by
    entities x days, and concurrent writers of one key store equal values.
    """

    _samples: Dict[CellKey, MetricSample] = field(default_factory=dict)
    _queries: Dict[str, QueryResult] = field(default_factory=dict)

    @staticmethod
    def cell_key(entity_id: str, window: TimeWindow) -> CellKey:
        return (entity_id, window.start, window.end)

    def get_sample(self, entity_id: str, window: TimeWindow) -> Optional[MetricSample]:
        return self._samples.get(self.cell_key(entity_id, window))

    def put_sample(self, entity_id: str, window: TimeWindow, sample: MetricSample) -> None:
        self._samples[self.cell_key(entity_id, window)] = sample

    def get_query(self, query_key: str) -> Optional[QueryResult]:
        return self._queries.get(query_key)

    def put_query(self, query_key: str, result: QueryResult) -> None:
        self._queries[query_key] = result

    def clear(self) -> None:
        self._samples.clear()
        self._queries.clear()

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    @property
    def query_count(self) -> int:
        return len(self._queries)
