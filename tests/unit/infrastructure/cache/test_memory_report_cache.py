from __future__ import annotations

from datetime import datetime, timezone

from fleetview.domain.entities.report import (
    FailedCell,
    MetricSample,
    QueryResult,
    ReportRow,
    TimeWindow,
)
from fleetview.infrastructure.cache import InMemoryReportCache

WINDOW = TimeWindow(
    start=datetime(2024, 1, 1, 6, tzinfo=timezone.utc),
    end=datetime(2024, 1, 2, 6, tzinfo=timezone.utc),
    label="01-01-2024",
)


def test_samples_are_keyed_by_entity_and_bounds() -> None:
    cache = InMemoryReportCache()
    sample = MetricSample("t5", WINDOW.start, 1.0)
    cache.put_sample("t5", WINDOW, sample)

    relabelled = TimeWindow(start=WINDOW.start, end=WINDOW.end, label="other")

    assert cache.get_sample("t5", relabelled) == sample
    assert cache.get_sample("t9", WINDOW) is None
    assert cache.sample_count == 1


def test_query_results_keep_their_failures_and_are_cleared() -> None:
    cache = InMemoryReportCache()
    rows = [ReportRow("01-01-2024", WINDOW.start, WINDOW.end, {"t5": 0.0, "t9": 1.0})]
    failed = [FailedCell("t5", "01-01-2024", WINDOW.start, "HTTP 500")]
    cache.put_query("range_1", QueryResult(rows, failed, total_cells=2))

    cached = cache.get_query("range_1")

    assert cached.failed_cells == failed
    assert cached.total_cells == 2
    assert cached.for_columns(["t9"]) == ([], 1)
    assert cached.for_columns(["t5", "t9"]) == (failed, 2)
    assert cache.get_query("range_2") is None

    cache.clear()
    assert cache.query_count == 0
    assert cache.sample_count == 0
