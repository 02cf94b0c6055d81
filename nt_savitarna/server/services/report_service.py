"""
Report Service.

Fetches the rows a report needs for the requested date range and hands them to
the pure builders in ``core.reporting``. The JSON report endpoints and the
CSV/PDF export share this service, so both always show the same numbers.
"""

from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from nt_savitarna.core.database.repositories import OrderRepository, UserRepository, ValuatorRepository
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain.enums import ReportType, UserRole
from nt_savitarna.core.models.domain.messages import INVALID_DATE, INVALID_DATE_RANGE
from nt_savitarna.core.models.io.reports import (
    ClientsReport,
    GeographyReport,
    OrdersReport,
    ReportData,
    ReportFilter,
    RevenueReport,
    ValuatorsReport,
)
from nt_savitarna.core.reporting import (
    InvalidDateRangeError,
    build_clients_report,
    build_geography_report,
    build_orders_report,
    build_revenue_report,
    build_valuators_report,
    get_date_range,
)
from nt_savitarna.core.reporting.date_ranges import parse_date
from nt_savitarna.server.core.constant import MAX_EXPORT_RECORDS
from nt_savitarna.server.exception_handlers import BadRequestError

logger = get_logger(__name__)


def resolve_report_range(report_filter: ReportFilter, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Concrete ``[start, end]`` of a report filter; 400 on malformed or inverted dates."""
    for value in (report_filter.date_from, report_filter.date_to):
        if value:
            try:
                parse_date(value)
            except InvalidDateRangeError:
                raise BadRequestError(INVALID_DATE) from None
    try:
        return get_date_range(report_filter.preset, report_filter.date_from, report_filter.date_to, now)
    except InvalidDateRangeError:
        raise BadRequestError(INVALID_DATE_RANGE) from None


class ReportService:
    """Builds admin reports from the database."""

    def __init__(self, session: AsyncSession, row_limit: Optional[int] = None) -> None:
        self.orders = OrderRepository(session)
        self.users = UserRepository(session)
        self.valuators = ValuatorRepository(session)
        self.row_limit = row_limit

    async def orders_report(self, date_from: datetime, date_to: datetime) -> OrdersReport:
        orders = await self.orders.list_created_between(date_from, date_to, limit=self.row_limit)
        return build_orders_report(orders, date_from, date_to)

    async def revenue_report(self, date_from: datetime, date_to: datetime) -> RevenueReport:
        orders = await self.orders.list_created_between(date_from, date_to, limit=self.row_limit)
        return build_revenue_report(orders, date_from, date_to)

    async def valuators_report(self, date_from: datetime, date_to: datetime) -> ValuatorsReport:
        valuators = await self.valuators.list(filters={"is_active": True})
        orders = await self.orders.list_created_between(
            date_from, date_to, limit=self.row_limit, assigned_only=True
        )
        return build_valuators_report(valuators, orders, date_from, date_to)

    async def clients_report(self, date_from: datetime, date_to: datetime) -> ClientsReport:
        clients = await self.users.list(filters={"role": UserRole.client.value})
        orders = await self.orders.list_created_between(date_from, date_to, limit=self.row_limit)
        return build_clients_report(clients, orders, date_from, date_to)

    async def geography_report(self, date_from: datetime, date_to: datetime) -> GeographyReport:
        orders = await self.orders.list_created_between(date_from, date_to, limit=self.row_limit)
        return build_geography_report(orders)

    async def build(self, report_type: ReportType, report_filter: ReportFilter) -> ReportData:
        date_from, date_to = resolve_report_range(report_filter)
        builders: Dict[ReportType, Callable[[datetime, datetime], Awaitable[ReportData]]] = {
            ReportType.orders: self.orders_report,
            ReportType.revenue: self.revenue_report,
            ReportType.valuators: self.valuators_report,
            ReportType.clients: self.clients_report,
            ReportType.geography: self.geography_report,
        }
        logger.debug("Building %s report for %s .. %s", report_type.value, date_from.date(), date_to.date())
        return await builders[report_type](date_from, date_to)


def export_report_service(session: AsyncSession) -> ReportService:
    """Report service capped at ``MAX_EXPORT_RECORDS`` rows per query."""
    return ReportService(session, row_limit=MAX_EXPORT_RECORDS)
