"""Domain port for the report response cache."""

from __future__ import annotations

from typing import Optional, Protocol

from fleetview.domain.entities.report import MetricSample, QueryResult, TimeWindow


class IReportCache(Protocol):
    """
    Two-granularity cache owned by the caller and injected into the engine.

    Cell entries are keyed by entity identifier and window boundaries,
    query entries by the range selector cache key. Entries never expire.
    """

    def get_sample(self, entity_id: str, window: TimeWindow) -> Optional[MetricSample]:
        ...

    def put_sample(self, entity_id: str, window: TimeWindow, sample: MetricSample) -> None:
        ...

    def get_query(self, query_key: str) -> Optional[QueryResult]:
        ...

    def put_query(self, query_key: str, result: QueryResult) -> None:
        ...

    def clear(self) -> None:
        ...

    @property
    def sample_count(self) -> int:
        ...

    @property
    def query_count(self) -> int:
        ...
