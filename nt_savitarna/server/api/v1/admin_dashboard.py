"""
Admin Dashboard Endpoints.

Headline statistics and the option lists used by the admin order filters.
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import AdminOrderFilter, DisplayStatus, ServiceType
from nt_savitarna.core.models.domain.services import get_display_status, get_order_price
from nt_savitarna.core.models.io.admin import DashboardStats, FilterOptions, MunicipalityCities
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.core.reporting.aggregation import group_by
from nt_savitarna.core.reporting.date_ranges import start_of_month
from nt_savitarna.server.exception_handlers import translate_db_errors
from nt_savitarna.server.services.deps import OrderRepoDep, get_admin_user

router = APIRouter(tags=["admin-dashboard"], dependencies=[Depends(get_admin_user)])

_REVENUE_STATUSES = (DisplayStatus.completed, DisplayStatus.paid)


@router.get(
    "/stats",
    response_model=ApiResponse[DashboardStats],
    summary="Dashboard Statistics",
    description="Order totals, this month's orders and revenue, completed and pending counts.",
    response_description="Dashboard statistics.",
)
async def dashboard_stats(orders: OrderRepoDep) -> ApiResponse[DashboardStats]:
    """
    Dashboard statistics.

    Monthly revenue sums the price of this month's orders whose display status
    is completed or paid.
    """
    now = datetime.now()
    month_start = start_of_month(now)
    with translate_db_errors(messages.STATS_FETCH_FAILED):
        total = await orders.count_all()
        monthly = await orders.list_created_between(month_start, now)
        completed = await orders.count_by_admin_status(AdminOrderFilter.completed)
        pending = await orders.count_by_admin_status(AdminOrderFilter.pending)

    monthly_revenue = sum(
        get_order_price(order.service_type, order.service_price)
        for order in monthly
        if get_display_status(order.service_type, order.is_enough_data_for_ai, order.status) in _REVENUE_STATUSES
    )
    return ApiResponse(
        data=DashboardStats(
            total_orders=total,
            monthly_orders=len(monthly),
            monthly_revenue=round(monthly_revenue, 2),
            completed_orders=completed,
            pending_orders=pending,
        )
    )


@router.get(
    "/filters",
    response_model=ApiResponse[FilterOptions],
    summary="Filter Options",
    description="Distinct municipalities, cities per municipality and property types found in orders.",
    response_description="Filter option lists.",
)
async def filter_options(orders: OrderRepoDep) -> ApiResponse[FilterOptions]:
    with translate_db_errors(messages.FILTERS_FETCH_FAILED):
        municipalities = await orders.distinct_municipalities()
        pairs = await orders.distinct_cities_by_municipality()
        property_types = await orders.distinct_property_types()

    cities = [
        MunicipalityCities(municipality=municipality, cities=sorted({city for _, city in rows}))
        for municipality, rows in group_by(pairs, lambda pair: pair[0]).items()
    ]
    return ApiResponse(
        data=FilterOptions(
            municipalities=municipalities,
            cities=cities,
            property_types=property_types,
            service_types=[service.value for service in ServiceType],
        )
    )
