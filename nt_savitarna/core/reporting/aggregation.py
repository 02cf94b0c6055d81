"""
Grouping, counting and time-series helpers used by the report builders.

Chart series are plain dictionaries so they can be fed straight into the
response schemas and the exporters: categorical points are ``{"name", "value"}``
and time-series points are ``{"date", "value"}``.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from nt_savitarna.core.models.domain.enums import Granularity

from .date_ranges import DateLike, InvalidDateRangeError, bucket_start, format_date_for_chart, next_bucket

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

ChartPoint = Dict[str, Any]
TimePoint = Dict[str, Any]


def group_by(items: Iterable[T], key_fn: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group items by a derived key, keeping first-seen key order."""
    groups: Dict[K, List[T]] = {}
    for item in items:
        groups.setdefault(key_fn(item), []).append(item)
    return groups


def group_and_count(items: Iterable[T], key_fn: Callable[[T], str]) -> List[ChartPoint]:
    """Count items per key, largest groups first; ties keep first-seen order."""
    counts: Dict[str, int] = {}
    for item in items:
        key = key_fn(item)
        counts[key] = counts.get(key, 0) + 1
    return sorted(({"name": k, "value": v} for k, v in counts.items()), key=lambda p: p["value"], reverse=True)


def group_and_sum(
    items: Iterable[T], key_fn: Callable[[T], str], value_fn: Callable[[T], float]
) -> List[ChartPoint]:
    """Sum a value per key, largest sums first."""
    sums: Dict[str, float] = {}
    for item in items:
        key = key_fn(item)
        sums[key] = sums.get(key, 0.0) + value_fn(item)
    return sorted(({"name": k, "value": v} for k, v in sums.items()), key=lambda p: p["value"], reverse=True)


def _bucket_key(value: Optional[DateLike], granularity: Granularity) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return format_date_for_chart(value, granularity)
    except InvalidDateRangeError:
        return None


def group_by_date_and_count(
    items: Iterable[T],
    date_fn: Callable[[T], Optional[DateLike]],
    granularity: Granularity = Granularity.day,
) -> List[TimePoint]:
    """Count items per date bucket, oldest first. Items without a usable date are skipped."""
    return group_by_date_and_sum(items, date_fn, lambda _: 1, granularity)


def group_by_date_and_sum(
    items: Iterable[T],
    date_fn: Callable[[T], Optional[DateLike]],
    value_fn: Callable[[T], float],
    granularity: Granularity = Granularity.day,
) -> List[TimePoint]:
    """Sum a value per date bucket, oldest first. Items without a usable date are skipped."""
    buckets: Dict[str, float] = defaultdict(int)
    for item in items:
        key = _bucket_key(date_fn(item), granularity)
        if key is None:
            continue
        buckets[key] += value_fn(item)
    return [{"date": key, "value": buckets[key]} for key in sorted(buckets)]


def iter_bucket_keys(date_from: datetime, date_to: datetime, granularity: Granularity) -> List[str]:
    """One key per calendar day, ISO week or month intersecting ``[date_from, date_to]``."""
    keys: List[str] = []
    cursor = bucket_start(date_from, granularity)
    while cursor <= date_to:
        keys.append(format_date_for_chart(cursor, granularity))
        cursor = next_bucket(cursor, granularity)
    return keys


def fill_missing_dates(
    data: Sequence[TimePoint],
    date_from: datetime,
    date_to: datetime,
    granularity: Granularity = Granularity.day,
) -> List[TimePoint]:
    """Expand a sparse series to exactly one point per bucket in the range, missing buckets at 0."""
    values = {point["date"]: point["value"] for point in data}
    return [{"date": key, "value": values.get(key, 0)} for key in iter_bucket_keys(date_from, date_to, granularity)]


def total(values: Iterable[float]) -> float:
    return sum(values)


def average(values: Sequence[float]) -> float:
    if not values:
        return 0
    return sum(values) / len(values)


def maximum(values: Sequence[float]) -> Optional[float]:
    return max(values) if values else None


def minimum(values: Sequence[float]) -> Optional[float]:
    return min(values) if values else None


def chart_value(point: ChartPoint) -> float:
    return point["value"]


def top_n(items: Iterable[T], n: int, value_fn: Optional[Callable[[T], float]] = None) -> List[T]:
    """The ``n`` items with the largest values; ties keep their input order."""
    key = value_fn or (lambda item: item)
    return sorted(items, key=key, reverse=True)[:n]


def calculate_change(current: float, previous: float) -> float:
    """Percentage change; growth from zero counts as 100%."""
    if previous == 0:
        return 100 if current > 0 else 0
    return (current - previous) / previous * 100
