"""
Domain Services Package

Pure report logic: window generation, row assembly and trend fitting.
"""

from .row_assembler import assemble_rows, project_rows, rows_cover
from .time_windows import (
    custom_windows,
    preset_windows,
    resolve_timezone,
    resolve_windows,
)
from .trend_estimator import apply_trend, fit_trend, row_average

__all__ = [
    "assemble_rows",
    "project_rows",
    "rows_cover",
    "custom_windows",
    "preset_windows",
    "resolve_timezone",
    "resolve_windows",
    "apply_trend",
    "fit_trend",
    "row_average",
]
