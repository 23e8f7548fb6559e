"""Domain service folding per-cell samples into report rows."""

from typing import Iterable, List, Mapping, Sequence, Tuple

from fleetview.domain.entities.report import MetricSample, ReportRow, TimeWindow

# (entity_id, window index) -> sample
SampleGrid = Mapping[Tuple[str, int], MetricSample]


def assemble_rows(
    windows: Sequence[TimeWindow],
    entity_ids: Iterable[str],
    samples: SampleGrid,
) -> List[ReportRow]:
    """
    Build one row per window, in window order.

    Every row carries a value for each entity id; a cell without a sample
    is reported as 0.0.
    """
    ids = list(entity_ids)
    rows: List[ReportRow] = []
    for index, window in enumerate(windows):
        values = {}
        for entity_id in ids:
            sample = samples.get((entity_id, index))
            values[entity_id] = sample.value if sample is not None else 0.0
        rows.append(
            ReportRow(
                label=window.label,
                window_start=window.start,
                window_end=window.end,
                values=values,
            )
        )
    return rows


def rows_cover(rows: Sequence[ReportRow], entity_ids: Iterable[str]) -> bool:
    """Return True when every row has a value for every entity id."""
    ids = list(entity_ids)
    return all(entity_id in row.values for row in rows for entity_id in ids)


def project_rows(rows: Sequence[ReportRow], entity_ids: Iterable[str]) -> List[ReportRow]:
    """Return copies of rows restricted to the given entity columns."""
    ids = list(entity_ids)
    return [
        ReportRow(
            label=row.label,
            window_start=row.window_start,
            window_end=row.window_end,
            values={entity_id: row.values[entity_id] for entity_id in ids},
        )
        for row in rows
    ]
