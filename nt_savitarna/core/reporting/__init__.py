"""
Reporting layer.

- date_ranges: preset resolution and time bucketing
- aggregation: grouping, counting and gap filling of chart series
- formatting: Lithuanian number, money and date formatting
- builders: report payloads built from fetched rows
"""

from .builders import (
    build_clients_report,
    build_geography_report,
    build_orders_report,
    build_revenue_report,
    build_valuators_report,
)
from .date_ranges import (
    DATE_PRESET_LABELS,
    InvalidDateRangeError,
    get_date_range,
    get_optimal_grouping,
)

__all__ = [
    "DATE_PRESET_LABELS",
    "InvalidDateRangeError",
    "build_clients_report",
    "build_geography_report",
    "build_orders_report",
    "build_revenue_report",
    "build_valuators_report",
    "get_date_range",
    "get_optimal_grouping",
]
