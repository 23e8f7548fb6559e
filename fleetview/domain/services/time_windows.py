"""Domain service resolving range selectors into report time windows."""

import math
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fleetview.domain.entities.errors import InvalidRangeError
from fleetview.domain.entities.report import (
    CustomRange,
    PresetRange,
    RangeSelector,
    TimeWindow,
)
from fleetview.shared.consts import DEFAULT_LABEL_FORMAT

REPORT_DAY = timedelta(hours=24)


def resolve_timezone(name: str) -> tzinfo:
    """Return the tzinfo for an IANA name, raising ValueError if unknown."""
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name}") from exc


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Read a naive datetime in ``tz``; convert an aware one to it."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def _check_window_count(count: int, max_windows: Optional[int]) -> None:
    if max_windows is not None and count > max_windows:
        raise InvalidRangeError(
            f"Range spans {count} days, more than the allowed {max_windows}",
            {"windows": count, "max_windows": max_windows},
        )


def preset_windows(
    days: int,
    *,
    boundary_hour: int = 6,
    tz: tzinfo = timezone.utc,
    now: Optional[datetime] = None,
    label_format: str = DEFAULT_LABEL_FORMAT,
    max_windows: Optional[int] = None,
) -> List[TimeWindow]:
    """
    Build ``days`` consecutive 24 hour windows, the last one starting today.

    Each report day starts at ``boundary_hour`` local time, so a boundary of
    0 gives midnight-to-midnight days and 6 gives 06:00-to-06:00 days.
    Windows are stepped in absolute time from today's boundary so they stay
    exactly 24 hours long and contiguous across DST changes. Labels name
    the calendar day each window belongs to.

    Raises:
        InvalidRangeError: If days < 1, the boundary hour is outside 0-23 or
            the range exceeds max_windows.
    """
    if isinstance(days, bool) or days < 1:
        raise InvalidRangeError(
            "Preset range must cover at least one day", {"days": days}
        )
    if not 0 <= boundary_hour <= 23:
        raise InvalidRangeError(
            "Day boundary hour must be between 0 and 23",
            {"boundary_hour": boundary_hour},
        )
    _check_window_count(days, max_windows)

    today = localize(now or datetime.now(tz), tz).date()
    anchor = datetime.combine(today, time(hour=boundary_hour), tzinfo=tz).astimezone(
        timezone.utc
    )

    windows: List[TimeWindow] = []
    for offset in range(days - 1, -1, -1):
        start = anchor - offset * REPORT_DAY
        windows.append(
            TimeWindow(
                start=start.astimezone(tz),
                end=(start + REPORT_DAY).astimezone(tz),
                label=(today - timedelta(days=offset)).strftime(label_format),
            )
        )
    return windows


def custom_windows(
    start: datetime,
    end: datetime,
    *,
    tz: tzinfo = timezone.utc,
    label_format: str = DEFAULT_LABEL_FORMAT,
    max_windows: Optional[int] = None,
) -> List[TimeWindow]:
    """
    Split ``[start, end)`` into report days anchored on start's time of day.

    The first window starts exactly at ``start``, every following window
    starts 24 hours after the previous one and the last window is cut so
    that it ends exactly at ``end``. Naive datetimes are read in ``tz``.

    Raises:
        InvalidRangeError: If end <= start or the range exceeds max_windows.
    """
    cursor = localize(start, tz).astimezone(timezone.utc)
    stop = localize(end, tz).astimezone(timezone.utc)
    if stop <= cursor:
        raise InvalidRangeError(
            "Range end must be after range start",
            {"start": cursor.isoformat(), "end": stop.isoformat()},
        )
    _check_window_count(math.ceil((stop - cursor) / REPORT_DAY), max_windows)

    windows: List[TimeWindow] = []
    while cursor < stop:
        window_end = min(cursor + REPORT_DAY, stop)
        local_start = cursor.astimezone(tz)
        windows.append(
            TimeWindow(
                start=local_start,
                end=window_end.astimezone(tz),
                label=local_start.strftime(label_format),
            )
        )
        cursor = window_end
    return windows


def resolve_windows(
    selector: RangeSelector,
    *,
    boundary_hour: int = 6,
    tz: tzinfo = timezone.utc,
    now: Optional[datetime] = None,
    label_format: str = DEFAULT_LABEL_FORMAT,
    max_windows: Optional[int] = None,
) -> List[TimeWindow]:
    """Resolve a preset or custom range selector into ordered windows."""
    if isinstance(selector, PresetRange):
        return preset_windows(
            selector.days,
            boundary_hour=boundary_hour,
            tz=tz,
            now=now,
            label_format=label_format,
            max_windows=max_windows,
        )
    if isinstance(selector, CustomRange):
        return custom_windows(
            selector.start,
            selector.end,
            tz=tz,
            label_format=label_format,
            max_windows=max_windows,
        )
    raise InvalidRangeError(
        "Unsupported range selector", {"selector": type(selector).__name__}
    )
