"""Unit tests for report aggregation helpers."""

from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from nt_savitarna.core.models.domain.enums import Granularity
from nt_savitarna.core.reporting.aggregation import (
    average,
    calculate_change,
    chart_value,
    fill_missing_dates,
    group_and_count,
    group_and_sum,
    group_by,
    group_by_date_and_count,
    group_by_date_and_sum,
    iter_bucket_keys,
    maximum,
    minimum,
    top_n,
    total,
)


def _row(**kwargs):
    return SimpleNamespace(**kwargs)


class TestGrouping:
    """Test categorical grouping."""

    def test_group_by_keeps_first_seen_order(self):
        rows = [_row(k="b"), _row(k="a"), _row(k="b")]

        groups = group_by(rows, lambda r: r.k)

        assert list(groups) == ["b", "a"]
        assert len(groups["b"]) == 2

    def test_group_and_count_sorted_desc_with_stable_ties(self):
        rows = [_row(k=k) for k in ["x", "y", "z", "y", "z", "z"]]

        assert group_and_count(rows, lambda r: r.k) == [
            {"name": "z", "value": 3},
            {"name": "y", "value": 2},
            {"name": "x", "value": 1},
        ]

    def test_group_and_count_ties(self):
        rows = [_row(k=k) for k in ["x", "y"]]

        assert [p["name"] for p in group_and_count(rows, lambda r: r.k)] == ["x", "y"]

    def test_group_and_sum(self):
        rows = [_row(k="a", v=10.0), _row(k="b", v=30.0), _row(k="a", v=25.5)]

        assert group_and_sum(rows, lambda r: r.k, lambda r: r.v) == [
            {"name": "a", "value": 35.5},
            {"name": "b", "value": 30.0},
        ]

    def test_empty_input(self):
        assert group_and_count([], lambda r: r) == []
        assert group_and_sum([], lambda r: r, lambda r: 1) == []


class TestDateGrouping:
    """Test time-bucketed grouping."""

    def test_count_by_day_skips_unusable_dates(self):
        rows = [
            _row(d=datetime(2024, 3, 2, 10)),
            _row(d="2024-03-01"),
            _row(d=datetime(2024, 3, 2, 23)),
            _row(d=None),
            _row(d="garbage"),
        ]

        assert group_by_date_and_count(rows, lambda r: r.d) == [
            {"date": "2024-03-01", "value": 1},
            {"date": "2024-03-02", "value": 2},
        ]

    def test_sum_by_month(self):
        rows = [
            _row(d=datetime(2024, 1, 31), v=8.0),
            _row(d=datetime(2024, 2, 1), v=30.0),
            _row(d=datetime(2024, 2, 20), v=30.0),
        ]

        assert group_by_date_and_sum(rows, lambda r: r.d, lambda r: r.v, Granularity.month) == [
            {"date": "2024-01", "value": 8.0},
            {"date": "2024-02", "value": 60.0},
        ]


class TestFillMissingDates:
    """Test gap filling of time series."""

    def test_daily_gaps_filled_with_zero(self):
        data = [{"date": "2024-03-02", "value": 4}]

        filled = fill_missing_dates(data, datetime(2024, 3, 1), datetime(2024, 3, 3, 23, 59), Granularity.day)

        assert filled == [
            {"date": "2024-03-01", "value": 0},
            {"date": "2024-03-02", "value": 4},
            {"date": "2024-03-03", "value": 0},
        ]

    def test_points_outside_range_dropped(self):
        data = [{"date": "2023-12-31", "value": 9}]

        filled = fill_missing_dates(data, datetime(2024, 1, 1), datetime(2024, 1, 1, 12), Granularity.day)

        assert filled == [{"date": "2024-01-01", "value": 0}]

    def test_weekly_keys_are_mondays(self):
        keys = iter_bucket_keys(datetime(2024, 3, 6), datetime(2024, 3, 20), Granularity.week)

        assert keys == ["2024-03-04", "2024-03-11", "2024-03-18"]

    def test_monthly_keys_cross_year(self):
        keys = iter_bucket_keys(datetime(2023, 11, 15), datetime(2024, 2, 3), Granularity.month)

        assert keys == ["2023-11", "2023-12", "2024-01", "2024-02"]

    def test_one_point_per_bucket(self):
        start = datetime(2024, 1, 1)
        end = datetime(2024, 12, 31, 23, 59, 59)

        assert len(fill_missing_dates([], start, end, Granularity.month)) == 12
        assert len(fill_missing_dates([], start, datetime(2024, 1, 31, 23), Granularity.day)) == 31


class TestStatistics:
    """Test numeric helpers."""

    def test_total_and_average(self):
        assert total([1, 2, 3]) == 6
        assert average([1, 2, 3, 4]) == 2.5
        assert average([]) == 0

    def test_extremes(self):
        assert maximum([3, 9, 1]) == 9
        assert minimum([3, 9, 1]) == 1
        assert maximum([]) is None
        assert minimum([]) is None

    def test_top_n_sorts_before_slicing(self):
        assert top_n([1, 3, 2], 2) == [3, 2]
        assert top_n([1], 5) == [1]
        assert top_n([], 3) == []

    def test_top_n_with_value_fn(self):
        points = [{"name": "Kaunas", "value": 1}, {"name": "Vilnius", "value": 4}, {"name": "Alytus", "value": 1}]

        assert top_n(points, 2, chart_value) == [{"name": "Vilnius", "value": 4}, {"name": "Kaunas", "value": 1}]

    @pytest.mark.parametrize(
        "current,previous,expected",
        [(150, 100, 50), (50, 100, -50), (10, 0, 100), (0, 0, 0)],
    )
    def test_calculate_change(self, current, previous, expected):
        assert calculate_change(current, previous) == expected
