"""
Report builders.

Pure functions turning already-fetched rows into report payloads. The report
service fetches rows for the requested date range and hands them over, so the
JSON endpoints and the CSV/PDF exports share the same numbers.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from nt_savitarna.core.models.domain.enums import OrderStatus
from nt_savitarna.core.models.domain.services import (
    NOT_SPECIFIED,
    UNKNOWN_CLIENT,
    get_order_price,
    is_completed,
    is_revenue_eligible,
    report_status_key,
    report_status_label,
    service_type_label,
)
from nt_savitarna.core.models.io.reports import (
    ClientsReport,
    GeographyReport,
    OrdersReport,
    RevenueReport,
    TopClient,
    ValuatorLoad,
    ValuatorRankingEntry,
    ValuatorsReport,
)

from .aggregation import (
    chart_value,
    fill_missing_dates,
    group_and_count,
    group_and_sum,
    group_by,
    group_by_date_and_count,
    group_by_date_and_sum,
    iter_bucket_keys,
    top_n,
)
from .date_ranges import days_between, format_date_for_chart, get_optimal_grouping, start_of_month

ORDERS_TOP_PROPERTY_TYPES = 10
ORDERS_TOP_MUNICIPALITIES = 10
VALUATORS_TOP_CHART = 15
VALUATORS_TOP_RANKING = 10
CLIENTS_TOP = 10
GEOGRAPHY_TOP_MUNICIPALITIES = 15
GEOGRAPHY_TOP_CITIES = 20
PROJECTION_DAYS = 30

ACTIVITY_BUCKETS = (
    ("1 užsakymas", 1, 1),
    ("2-3 užsakymai", 2, 3),
    ("4-5 užsakymai", 4, 5),
    ("6-10 užsakymų", 6, 10),
    ("11+ užsakymų", 11, None),
)


def _order_amount(order: Any) -> float:
    return get_order_price(order.service_type, order.service_price)


def _created_at(row: Any) -> Optional[datetime]:
    return row.created_at


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_orders_report(orders: Sequence[Any], date_from: datetime, date_to: datetime) -> OrdersReport:
    granularity = get_optimal_grouping(date_from, date_to)

    by_status = [
        {"name": report_status_label(point["name"]), "value": point["value"]}
        for point in group_and_count(orders, report_status_key)
    ]
    by_service_type = group_and_count(orders, lambda o: service_type_label(o.service_type))
    by_property_type = group_and_count(orders, lambda o: o.main_property_type or NOT_SPECIFIED)
    by_municipality = group_and_count(orders, lambda o: o.address_municipality or NOT_SPECIFIED)
    timeline = fill_missing_dates(
        group_by_date_and_count(orders, _created_at, granularity), date_from, date_to, granularity
    )

    return OrdersReport(
        total=len(orders),
        by_status=by_status,
        by_service_type=by_service_type,
        by_property_type=top_n(by_property_type, ORDERS_TOP_PROPERTY_TYPES, chart_value),
        by_municipality=top_n(by_municipality, ORDERS_TOP_MUNICIPALITIES, chart_value),
        timeline=timeline,
    )


def build_revenue_report(
    orders: Sequence[Any], date_from: datetime, date_to: datetime, now: Optional[datetime] = None
) -> RevenueReport:
    """Revenue over paid and delivered orders, with a 30-day projection from the daily average so far."""
    now = now or datetime.now()
    granularity = get_optimal_grouping(date_from, date_to)
    paid = [order for order in orders if is_revenue_eligible(order)]

    total_revenue = sum(_order_amount(order) for order in paid)
    average_order_value = total_revenue / len(paid) if paid else 0.0
    daily_average = total_revenue / days_between(date_from, now)

    by_service_type = [
        {"name": point["name"], "value": round(point["value"], 2)}
        for point in group_and_sum(paid, lambda o: service_type_label(o.service_type), _order_amount)
    ]
    timeline = fill_missing_dates(
        group_by_date_and_sum(paid, _created_at, _order_amount, granularity), date_from, date_to, granularity
    )

    return RevenueReport(
        total_revenue=round(total_revenue, 2),
        average_order_value=round(average_order_value, 2),
        projected_revenue=round(daily_average * PROJECTION_DAYS, 2),
        by_service_type=by_service_type,
        timeline=timeline,
    )


def build_valuators_report(
    valuators: Sequence[Any], orders: Sequence[Any], date_from: datetime, date_to: datetime
) -> ValuatorsReport:
    """Workload of the given valuators over orders assigned within the range.

    ``orders`` are expected to be assigned ones; orders pointing to codes that
    are not in ``valuators`` still count towards ``total_assigned``.
    """
    orders_by_code = group_by(orders, lambda o: o.priskirta)

    ranking: List[ValuatorRankingEntry] = []
    for valuator in valuators:
        assigned = orders_by_code.get(valuator.code, [])
        completed = sum(1 for order in assigned if is_completed(order))
        in_progress = sum(
            1 for order in assigned if order.status == OrderStatus.paid.value and not is_completed(order)
        )
        ranking.append(
            ValuatorRankingEntry(
                id=valuator.id,
                code=valuator.code,
                name=f"{valuator.first_name} {valuator.last_name}",
                completed_orders=completed,
                in_progress_orders=in_progress,
                total_orders=len(assigned),
            )
        )
    ranking.sort(key=lambda entry: entry.total_orders, reverse=True)

    loaded = [entry for entry in ranking if entry.total_orders > 0]
    total_assigned = len(orders)
    average_per_valuator = _round_half_up(total_assigned / len(loaded)) if loaded else 0

    most_loaded = ValuatorLoad(name=loaded[0].name, count=loaded[0].total_orders) if loaded else None
    least_loaded = ValuatorLoad(name=loaded[-1].name, count=loaded[-1].total_orders) if loaded else None

    codes = [valuator.code for valuator in valuators]
    granularity = get_optimal_grouping(date_from, date_to)
    series: Dict[str, Dict[str, Any]] = {
        key: {"date": key, **{code: 0 for code in codes}}
        for key in iter_bucket_keys(date_from, date_to, granularity)
    }
    for order in orders:
        if order.created_at is None or order.priskirta not in codes:
            continue
        point = series.get(format_date_for_chart(order.created_at, granularity))
        if point is not None:
            point[order.priskirta] += 1

    return ValuatorsReport(
        total_assigned=total_assigned,
        average_per_valuator=average_per_valuator,
        most_loaded=most_loaded,
        least_loaded=least_loaded,
        by_valuator=[{"name": e.name, "value": e.total_orders} for e in ranking[:VALUATORS_TOP_CHART]],
        ranking=ranking[:VALUATORS_TOP_RANKING],
        valuator_codes=codes,
        timeline=list(series.values()),
    )


def _activity_bucket(count: int) -> str:
    for label, low, high in ACTIVITY_BUCKETS:
        if count >= low and (high is None or count <= high):
            return label
    return ACTIVITY_BUCKETS[-1][0]


def build_clients_report(
    clients: Sequence[Any],
    orders: Sequence[Any],
    date_from: datetime,
    date_to: datetime,
    now: Optional[datetime] = None,
) -> ClientsReport:
    """Client activity.

    ``clients`` are all users with the client role; ``orders`` are the orders
    created within the range. Orders are attributed to clients by lower-cased
    contact e-mail, and orders without an e-mail are left out of the client
    statistics.
    """
    now = now or datetime.now()
    granularity = get_optimal_grouping(date_from, date_to)
    month_start = start_of_month(now)

    new_this_month = sum(1 for user in clients if user.created_at and user.created_at >= month_start)
    registered_in_range = [
        user for user in clients if user.created_at and date_from <= user.created_at <= date_to
    ]
    registration_timeline = fill_missing_dates(
        group_by_date_and_count(registered_in_range, _created_at, granularity), date_from, date_to, granularity
    )

    by_email = group_by(
        (order for order in orders if order.contact_email), lambda o: o.contact_email.strip().lower()
    )

    distribution = {label: 0 for label, _, _ in ACTIVITY_BUCKETS}
    for client_orders in by_email.values():
        distribution[_activity_bucket(len(client_orders))] += 1
    activity_distribution = [{"name": name, "value": value} for name, value in distribution.items() if value > 0]

    top_clients = [
        TopClient(
            email=client_orders[0].contact_email,
            name=client_orders[0].contact_name or UNKNOWN_CLIENT,
            orders_count=len(client_orders),
            total_spent=round(sum(_order_amount(o) for o in client_orders if is_revenue_eligible(o)), 2),
        )
        for client_orders in by_email.values()
    ]
    top_clients.sort(key=lambda client: client.orders_count, reverse=True)

    return ClientsReport(
        total_clients=len(clients),
        active_clients=len(by_email),
        new_this_month=new_this_month,
        registration_timeline=registration_timeline,
        activity_distribution=activity_distribution,
        top_clients=top_clients[:CLIENTS_TOP],
    )


def build_geography_report(orders: Sequence[Any]) -> GeographyReport:
    by_municipality = group_and_count(orders, lambda o: o.address_municipality or NOT_SPECIFIED)
    by_city = group_and_count(orders, lambda o: o.address_city or NOT_SPECIFIED)

    municipalities = {order.address_municipality for order in orders if order.address_municipality}
    cities = {order.address_city for order in orders if order.address_city}

    return GeographyReport(
        by_municipality=top_n(by_municipality, GEOGRAPHY_TOP_MUNICIPALITIES, chart_value),
        by_city=top_n(by_city, GEOGRAPHY_TOP_CITIES, chart_value),
        total_locations=len(municipalities) + len(cities),
    )
