"""Domain service computing the linear trend overlay of a report."""

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from fleetview.domain.entities.report import ReportRow, TrendModel


def row_average(row: ReportRow, selected: Iterable[str]) -> float:
    """Mean over the selected entities present in the row, 0.0 if none are."""
    present = [row.values[key] for key in selected if row.values.get(key) is not None]
    if not present:
        return 0.0
    return sum(present) / len(present)


def fit_trend(values: Sequence[float]) -> TrendModel:
    """
    Ordinary least-squares fit of ``values[i]`` against ``i``.

    When the fit is undefined (fewer than two points, or a zero
    denominator) the line is flat at the mean of the values.
    """
    n = len(values)
    if n == 0:
        return TrendModel(slope=0.0, intercept=0.0)

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in enumerate(values):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    denominator = n * sum_x2 - sum_x * sum_x
    if n <= 1 or denominator == 0:
        return TrendModel(slope=0.0, intercept=sum_y / n)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return TrendModel(slope=slope, intercept=intercept)


def apply_trend(
    rows: Sequence[ReportRow], selected: Iterable[str]
) -> Tuple[List[ReportRow], Optional[TrendModel]]:
    """
    Return new rows carrying ``average`` and ``trend`` plus the fitted model.

    Input rows are left untouched. An empty row sequence yields no model.
    """
    if not rows:
        return [], None

    keys = list(selected)
    averages = [row_average(row, keys) for row in rows]
    model = fit_trend(averages)
    trended = [
        replace(row, average=average, trend=model.predict(index))
        for index, (row, average) in enumerate(zip(rows, averages))
    ]
    return trended, model

