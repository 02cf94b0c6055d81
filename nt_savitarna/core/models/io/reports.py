"""
Report I/O models.

Payloads of the ``/api/admin/reports/*`` endpoints and the body of the export
request.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from nt_savitarna.core.models.domain.enums import DatePreset, ExportFormat, ReportType
from nt_savitarna.core.models.domain.messages import INVALID_EXPORT_FORMAT, INVALID_REPORT_TYPE

Number = Union[int, float]


class ChartDataPoint(BaseModel):
    name: str
    value: Number


class TimeSeriesPoint(BaseModel):
    date: str = Field(description="Bucket key: YYYY-MM-DD, Monday of the week, or YYYY-MM")
    value: Number


class ReportFilter(BaseModel):
    """Date filter shared by report queries and exports."""

    preset: str = Field(default=DatePreset.month.value, description="today, week, month, quarter, year or custom")
    date_from: Optional[str] = Field(default=None, description="ISO date, used with the custom preset")
    date_to: Optional[str] = Field(default=None, description="ISO date, used with the custom preset")


class OrdersReport(BaseModel):
    total: int
    by_status: List[ChartDataPoint]
    by_service_type: List[ChartDataPoint]
    by_property_type: List[ChartDataPoint]
    by_municipality: List[ChartDataPoint]
    timeline: List[TimeSeriesPoint]


class RevenueReport(BaseModel):
    total_revenue: float
    average_order_value: float
    projected_revenue: float
    by_service_type: List[ChartDataPoint]
    timeline: List[TimeSeriesPoint]


class ValuatorLoad(BaseModel):
    name: str
    count: int


class ValuatorRankingEntry(BaseModel):
    id: Optional[int]
    code: str
    name: str
    completed_orders: int
    in_progress_orders: int
    total_orders: int


class ValuatorsReport(BaseModel):
    total_assigned: int
    average_per_valuator: int
    most_loaded: Optional[ValuatorLoad] = None
    least_loaded: Optional[ValuatorLoad] = None
    by_valuator: List[ChartDataPoint]
    ranking: List[ValuatorRankingEntry]
    valuator_codes: List[str] = Field(description="Series names present in every timeline point")
    timeline: List[Dict[str, Any]] = Field(description="Points of the form {date, <code>: count, ...}")


class TopClient(BaseModel):
    email: str
    name: str
    orders_count: int
    total_spent: float


class ClientsReport(BaseModel):
    total_clients: int
    active_clients: int
    new_this_month: int
    registration_timeline: List[TimeSeriesPoint]
    activity_distribution: List[ChartDataPoint]
    top_clients: List[TopClient]


class GeographyReport(BaseModel):
    by_municipality: List[ChartDataPoint]
    by_city: List[ChartDataPoint]
    total_locations: int


ReportData = Union[OrdersReport, RevenueReport, ValuatorsReport, ClientsReport, GeographyReport]


class ExportRequest(BaseModel):
    """Body of ``POST /api/admin/reports/export``."""

    report_type: ReportType
    format: ExportFormat
    filter: ReportFilter = Field(default_factory=ReportFilter)

    @field_validator("report_type", mode="before")
    @classmethod
    def _check_report_type(cls, value: Any) -> Any:
        if value not in {item.value for item in ReportType}:
            raise ValueError(INVALID_REPORT_TYPE)
        return value

    @field_validator("format", mode="before")
    @classmethod
    def _check_format(cls, value: Any) -> Any:
        if value not in {item.value for item in ExportFormat}:
            raise ValueError(INVALID_EXPORT_FORMAT)
        return value
