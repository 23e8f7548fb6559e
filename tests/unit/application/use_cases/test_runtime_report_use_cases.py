from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from fleetview.application.dtos.report_dto import RuntimeReportRequestDTO
from fleetview.application.use_cases.runtime_report_use_cases import (
    GenerateRuntimeReportUseCase,
    RecomputeTrendUseCase,
)
from fleetview.domain.entities.errors import (
    EmptySelectionError,
    InvalidRangeError,
    ReportNotAvailableError,
    UnknownEntityError,
)
from fleetview.domain.entities.report import CustomRange, PresetRange
from fleetview.infrastructure.gateways.runtime_report_gateway import RuntimeReportGateway


@pytest.fixture()
def engine(fleet_catalog, report_options, report_cache, stub_gateway, fixed_now):
    return GenerateRuntimeReportUseCase(
        runtime_gateway=stub_gateway,
        report_cache=report_cache,
        fleet_catalog=fleet_catalog,
        options=report_options,
        clock=lambda: fixed_now,
    )


@pytest.mark.asyncio
async def test_one_hour_of_running_time_is_reported_as_one(engine, stub_gateway) -> None:
    report = await engine.run(PresetRange(days=1), entity_ids=["t5"])

    assert len(report.rows) == 1
    row = report.rows[0]
    assert row.label == "10-03-2024"
    assert row.values == {"t5": pytest.approx(1.0)}
    assert row.average == pytest.approx(1.0)
    assert row.trend == pytest.approx(1.0)
    assert stub_gateway.calls == [
        (
            "t5",
            datetime(2024, 3, 10, 6, tzinfo=timezone.utc),
            datetime(2024, 3, 11, 6, tzinfo=timezone.utc),
            None,
        )
    ]


@pytest.mark.asyncio
async def test_custom_range_fetches_one_call_per_day(engine, stub_gateway) -> None:
    start = datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
    end = datetime(2024, 1, 3, 8, tzinfo=timezone.utc)

    report = await engine.run(CustomRange(start=start, end=end), entity_ids=["t5"])

    assert [row.label for row in report.rows] == ["01-01-2024", "02-01-2024"]
    assert [(c[1], c[2]) for c in stub_gateway.calls] == [
        (start, datetime(2024, 1, 2, 8, tzinfo=timezone.utc)),
        (datetime(2024, 1, 2, 8, tzinfo=timezone.utc), end),
    ]


@pytest.mark.asyncio
async def test_repeated_query_is_served_from_cache(engine, stub_gateway) -> None:
    first = await engine.run(PresetRange(days=3))
    calls_after_first = len(stub_gateway.calls)

    second = await engine.run(PresetRange(days=3))

    assert calls_after_first == 9
    assert len(stub_gateway.calls) == calls_after_first
    assert not first.from_cache
    assert second.from_cache
    assert [r.values for r in second.rows] == [r.values for r in first.rows]


@pytest.mark.asyncio
async def test_new_columns_only_fetch_missing_cells(engine, stub_gateway) -> None:
    await engine.run(PresetRange(days=2), entity_ids=["t5"])
    stub_gateway.calls.clear()

    report = await engine.run(PresetRange(days=2), entity_ids=["t5", "t9"])

    assert not report.from_cache
    assert {call[0] for call in stub_gateway.calls} == {"t9"}
    assert len(stub_gateway.calls) == 2
    assert all(set(row.values) == {"t5", "t9"} for row in report.rows)


@pytest.mark.asyncio
async def test_failed_cells_are_zero_filled_and_not_cached(
    fleet_catalog, report_options, report_cache, gateway_factory, fixed_now
) -> None:
    gateway = gateway_factory(seconds={"t5": 7200.0}, failing={"t9"})
    engine = GenerateRuntimeReportUseCase(
        gateway, report_cache, fleet_catalog, report_options, clock=lambda: fixed_now
    )

    report = await engine.run(PresetRange(days=2), entity_ids=["t5", "t9"])

    assert [row.values for row in report.rows] == [
        {"t5": pytest.approx(2.0), "t9": 0.0},
        {"t5": pytest.approx(2.0), "t9": 0.0},
    ]
    assert [cell.entity_id for cell in report.failed_cells] == ["t9", "t9"]
    assert report.total_cells == 4
    assert not report.all_failed

    window = report.rows[-1]
    gateway.calls.clear()
    await engine.run(
        CustomRange(start=window.window_start, end=window.window_end),
        entity_ids=["t5", "t9"],
    )

    assert [call[0] for call in gateway.calls] == ["t9"]


@pytest.mark.asyncio
async def test_every_cell_failing_flags_report(
    fleet_catalog, report_options, report_cache, gateway_factory, fixed_now
) -> None:
    gateway = gateway_factory(failing={"t5", "t9", "d1"})
    engine = GenerateRuntimeReportUseCase(
        gateway, report_cache, fleet_catalog, report_options, clock=lambda: fixed_now
    )

    report = await engine.run(PresetRange(days=1))

    assert report.all_failed
    assert report.rows[0].values == {"t5": 0.0, "t9": 0.0, "d1": 0.0}


@pytest.mark.asyncio
async def test_aggregation_is_forwarded(engine, stub_gateway) -> None:
    await engine.run(PresetRange(days=1), entity_ids=["t5"], aggregation="1hr")

    assert stub_gateway.calls[0][3] == "1hr"


@pytest.mark.asyncio
async def test_input_errors_are_raised_before_fetching(engine, stub_gateway) -> None:
    with pytest.raises(UnknownEntityError):
        await engine.run(PresetRange(days=1), entity_ids=["zz"])
    with pytest.raises(EmptySelectionError):
        await engine.run(PresetRange(days=1), entity_ids=[])
    with pytest.raises(InvalidRangeError):
        await engine.run(
            CustomRange(
                start=datetime(2024, 1, 2, tzinfo=timezone.utc),
                end=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
        )
    with pytest.raises(InvalidRangeError):
        await engine.run(PresetRange(days=90))

    assert stub_gateway.calls == []


@pytest.mark.asyncio
async def test_older_cycle_is_superseded(
    fleet_catalog, report_options, report_cache, gateway_factory, fixed_now
) -> None:
    release = asyncio.Event()
    today = datetime(2024, 3, 10, 6, tzinfo=timezone.utc)

    class _GatedGateway(gateway_factory):
        async def fetch_running_hours(self, entity, window, aggregation=None):
            if window.start < today:
                await release.wait()
            return await super().fetch_running_hours(entity, window, aggregation)

    engine = GenerateRuntimeReportUseCase(
        _GatedGateway(),
        report_cache,
        fleet_catalog,
        report_options,
        clock=lambda: fixed_now,
    )

    older = asyncio.create_task(engine.run(PresetRange(days=2), entity_ids=["t5"]))
    for _ in range(5):
        await asyncio.sleep(0)

    newer = await engine.run(PresetRange(days=1), entity_ids=["t5"])
    release.set()
    stale = await older

    assert stale.cycle < newer.cycle
    assert stale.superseded
    assert not newer.superseded
    assert engine.latest_report is newer


@pytest.mark.asyncio
async def test_recompute_changes_selection_without_fetching(
    fleet_catalog, report_options, report_cache, gateway_factory, fixed_now
) -> None:
    gateway = gateway_factory(seconds={"t5": 3600.0, "t9": 10800.0})
    engine = GenerateRuntimeReportUseCase(
        gateway, report_cache, fleet_catalog, report_options, clock=lambda: fixed_now
    )
    await engine.run(PresetRange(days=2), entity_ids=["t5", "t9"])
    calls = len(gateway.calls)

    report = engine.recompute(selected=["t9"])

    assert len(gateway.calls) == calls
    assert [row.average for row in report.rows] == pytest.approx([3.0, 3.0])
    assert report.trend is not None
    assert report.trend.slope == pytest.approx(0.0)

    plain = engine.recompute(include_trend=False)
    assert plain.trend is None
    assert all(row.average is None for row in plain.rows)


def test_recompute_without_report_raises(engine) -> None:
    with pytest.raises(ReportNotAvailableError):
        engine.recompute()


@pytest.mark.asyncio
async def test_execute_maps_request_to_dto(engine) -> None:
    request = RuntimeReportRequestDTO(
        entity_ids=["t9", "t5"], selected=["t5"], days=2, include_trend=False
    )

    dto = await engine.execute(request)

    assert dto.query_key == "range_2"
    assert [entity.entity_id for entity in dto.entities] == ["t9", "t5"]
    assert dto.selected == ["t5"]
    assert dto.trend is None
    assert len(dto.rows) == 2


@pytest.mark.asyncio
async def test_execute_uses_default_range(engine) -> None:
    dto = await engine.execute(RuntimeReportRequestDTO(entity_ids=["t5"]))

    assert dto.query_key == "range_14"
    assert len(dto.rows) == 14


@pytest.mark.asyncio
async def test_recompute_trend_use_case(engine) -> None:
    await engine.run(PresetRange(days=1), entity_ids=["t5"])

    dto = await RecomputeTrendUseCase(engine).execute(selected=["t5"])

    assert dto.entities[0].name == "Forklift T5"
    assert dto.rows[0].average == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_one_hour_everywhere_gives_flat_rows_of_one(engine) -> None:
    report = await engine.run(PresetRange(days=3), entity_ids=["t5", "t9"])

    assert len(report.rows) == 3
    for row in report.rows:
        assert row.values == {"t5": pytest.approx(1.0), "t9": pytest.approx(1.0)}
        assert row.average == pytest.approx(1.0)
        assert row.trend == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_cached_repeat_keeps_failure_diagnostics(
    fleet_catalog, report_options, report_cache, gateway_factory, fixed_now
) -> None:
    gateway = gateway_factory(failing={"t5", "t9", "d1"})
    engine = GenerateRuntimeReportUseCase(
        gateway, report_cache, fleet_catalog, report_options, clock=lambda: fixed_now
    )

    first = await engine.run(PresetRange(days=2))
    second = await engine.run(PresetRange(days=2))

    assert second.from_cache
    assert first.all_failed and second.all_failed
    assert len(second.failed_cells) == 6
    assert second.total_cells == 6


@pytest.mark.asyncio
async def test_cached_subset_keeps_only_its_columns_failures(
    fleet_catalog, report_options, report_cache, gateway_factory, fixed_now
) -> None:
    gateway = gateway_factory(failing={"t9"})
    engine = GenerateRuntimeReportUseCase(
        gateway, report_cache, fleet_catalog, report_options, clock=lambda: fixed_now
    )

    await engine.run(PresetRange(days=2))
    subset = await engine.run(PresetRange(days=2), entity_ids=["t5", "t9"])

    assert subset.from_cache
    assert [cell.entity_id for cell in subset.failed_cells] == ["t9", "t9"]
    assert subset.total_cells == 4


@pytest.mark.asyncio
async def test_unparseable_count_zero_fills_the_cell(
    monkeypatch, fleet_catalog, report_options, report_cache, fixed_now
) -> None:
    class _Response:
        status_code = 200

        def raise_for_status(self) -> None:
            return None

        def json(self):
            return {"running_hours": 1.5, "count": float("1e400")}

    class _Client:
        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return None

        async def post(self, url, json=None, headers=None):
            return _Response()

    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: _Client())
    engine = GenerateRuntimeReportUseCase(
        RuntimeReportGateway("https://reports.local/runtime-report"),
        report_cache,
        fleet_catalog,
        report_options,
        clock=lambda: fixed_now,
    )

    report = await engine.run(PresetRange(days=1), entity_ids=["t5"])

    assert report.rows[0].values == {"t5": 0.0}
    assert report.all_failed
    assert "non-numeric" in report.failed_cells[0].error
