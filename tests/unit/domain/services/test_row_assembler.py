from __future__ import annotations

from datetime import datetime, timezone

from fleetview.domain.entities.report import MetricSample
from fleetview.domain.services.row_assembler import assemble_rows, project_rows, rows_cover
from fleetview.domain.services.time_windows import preset_windows

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_assemble_rows_fills_missing_cells_with_zero() -> None:
    windows = preset_windows(2, now=NOW)
    samples = {
        ("t5", 0): MetricSample("t5", windows[0].start, 1.5),
        ("t9", 1): MetricSample("t9", windows[1].start, 2.0),
    }

    rows = assemble_rows(windows, ["t5", "t9"], samples)

    assert [row.label for row in rows] == [w.label for w in windows]
    assert rows[0].values == {"t5": 1.5, "t9": 0.0}
    assert rows[1].values == {"t5": 0.0, "t9": 2.0}


def test_rows_cover_and_project() -> None:
    windows = preset_windows(1, now=NOW)
    rows = assemble_rows(windows, ["t5", "t9"], {})

    assert rows_cover(rows, ["t5"])
    assert not rows_cover(rows, ["t5", "d1"])

    projected = project_rows(rows, ["t9"])
    assert projected[0].values == {"t9": 0.0}
    assert rows[0].values == {"t5": 0.0, "t9": 0.0}
