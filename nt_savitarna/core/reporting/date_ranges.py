"""
Date range resolution and time bucketing for reports.

All datetimes are naive and expressed in the server's local wall time, which is
how order and user timestamps are stored.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta
from typing import Dict, Optional, Tuple, Union

from nt_savitarna.core.models.domain.enums import DatePreset, Granularity

DateLike = Union[datetime, date, str]

DATE_PRESET_LABELS: Dict[str, str] = {
    DatePreset.today.value: "Šiandien",
    DatePreset.week.value: "Paskutinės 7 dienos",
    DatePreset.month.value: "Paskutinės 30 dienų",
    DatePreset.quarter.value: "Paskutiniai 3 mėnesiai",
    DatePreset.year.value: "Paskutiniai 12 mėnesių",
    DatePreset.custom.value: "Pasirinktas laikotarpis",
}

DEFAULT_RANGE_DAYS = 30


class InvalidDateRangeError(ValueError):
    """Raised for malformed dates or a range that ends before it starts."""


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def start_of_month(value: datetime) -> datetime:
    return datetime(value.year, value.month, 1)


def shift_months(value: datetime, months: int) -> datetime:
    """Move ``value`` by whole months, clamping the day to the target month's length."""
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def parse_date(value: DateLike) -> datetime:
    """Parse an ISO date or datetime; timezone-aware values are converted to naive local time."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidDateRangeError(f"Invalid date: {value!r}") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def resolve_preset(preset: Optional[str], now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Resolve a preset name to ``(date_from, date_to)``.

    ``date_to`` is always the end of today. Unknown presets, and ``custom``
    without explicit dates, cover the last 30 days.
    """
    now = now or datetime.now()
    today = start_of_day(now)

    if preset == DatePreset.today.value:
        date_from = today
    elif preset == DatePreset.week.value:
        date_from = today - timedelta(days=7)
    elif preset == DatePreset.month.value:
        date_from = shift_months(today, -1)
    elif preset == DatePreset.quarter.value:
        date_from = shift_months(today, -3)
    elif preset == DatePreset.year.value:
        date_from = shift_months(today, -12)
    else:
        date_from = today - timedelta(days=DEFAULT_RANGE_DAYS)

    return date_from, end_of_day(now)


def get_date_range(
    preset: Optional[str] = None,
    date_from: Optional[DateLike] = None,
    date_to: Optional[DateLike] = None,
    now: Optional[datetime] = None,
) -> Tuple[datetime, datetime]:
    """Resolve a report filter to concrete start and end instants.

    A ``custom`` preset with both dates covers whole days from the start of
    ``date_from`` to the end of ``date_to``. Everything else goes through
    :func:`resolve_preset`.

    Raises:
        InvalidDateRangeError: a date is malformed or the range ends before it starts.
    """
    if preset == DatePreset.custom.value and date_from and date_to:
        start = start_of_day(parse_date(date_from))
        end = end_of_day(parse_date(date_to))
        if start > end:
            raise InvalidDateRangeError(f"Range starts after it ends: {date_from} > {date_to}")
        return start, end
    return resolve_preset(preset, now)


def get_optimal_grouping(date_from: datetime, date_to: datetime) -> Granularity:
    """Pick a bucket size that keeps charts readable: days up to a month, weeks up to a quarter."""
    diff_days = math.ceil((date_to - date_from).total_seconds() / 86400)
    if diff_days <= 31:
        return Granularity.day
    if diff_days <= 90:
        return Granularity.week
    return Granularity.month


def bucket_start(value: datetime, granularity: Granularity) -> datetime:
    """First instant of the bucket containing ``value``; weeks start on Monday."""
    day = start_of_day(value)
    if granularity == Granularity.month:
        return start_of_month(day)
    if granularity == Granularity.week:
        return day - timedelta(days=day.weekday())
    return day


def next_bucket(value: datetime, granularity: Granularity) -> datetime:
    if granularity == Granularity.month:
        return shift_months(start_of_month(value), 1)
    if granularity == Granularity.week:
        return value + timedelta(days=7)
    return value + timedelta(days=1)


def format_date_for_chart(value: DateLike, granularity: Granularity) -> str:
    """Bucket key: ``YYYY-MM-DD`` for days, the Monday's date for weeks, ``YYYY-MM`` for months."""
    start = bucket_start(parse_date(value), granularity)
    if granularity == Granularity.month:
        return start.strftime("%Y-%m")
    return start.strftime("%Y-%m-%d")


def days_between(date_from: datetime, date_to: datetime) -> int:
    """Whole days touched by the span, never less than one."""
    return max(math.ceil((date_to - date_from).total_seconds() / 86400), 1)


def format_filter_range(
    preset: Optional[str],
    date_from: Optional[DateLike] = None,
    date_to: Optional[DateLike] = None,
) -> str:
    """Range token used in export headers and file names: ``from_to`` dates or the preset name."""
    if date_from and date_to:
        return f"{parse_date(date_from):%Y-%m-%d}_{parse_date(date_to):%Y-%m-%d}"
    return preset or DatePreset.month.value


def preset_label(preset: Optional[str]) -> str:
    return DATE_PRESET_LABELS.get(preset or "", DATE_PRESET_LABELS[DatePreset.custom.value])
