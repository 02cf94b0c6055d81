"""
Admin Valuator Endpoints.

Valuator management with workload statistics. Orders reference valuators by
their code (``Order.priskirta``), so the code cannot change after creation.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError

from nt_savitarna.core.database.entities import Valuator
from nt_savitarna.core.database.repositories import ValuatorRepository, WorkloadCounts
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import Granularity, ValuatorOrderFilter
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.core.models.io.orders import OrderRead
from nt_savitarna.core.models.io.valuators import (
    ValuatorCreate,
    ValuatorDetail,
    ValuatorList,
    ValuatorRead,
    ValuatorUpdate,
    ValuatorWithStats,
)
from nt_savitarna.core.reporting.aggregation import fill_missing_dates, group_by_date_and_count
from nt_savitarna.core.reporting.date_ranges import (
    InvalidDateRangeError,
    end_of_day,
    parse_date,
    shift_months,
    start_of_day,
    start_of_month,
)
from nt_savitarna.server.core.constant import VALUATOR_MONTHLY_STATS_MONTHS, VALUATOR_ORDERS_PAGE_SIZE
from nt_savitarna.server.exception_handlers import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    translate_db_errors,
)
from nt_savitarna.server.services.deps import OrderRepoDep, ValuatorIdDep, ValuatorRepoDep, get_admin_user

logger = get_logger(__name__)

router = APIRouter(tags=["admin-valuators"], dependencies=[Depends(get_admin_user)])


def _with_stats(valuator: Valuator, counts: WorkloadCounts) -> ValuatorWithStats:
    return ValuatorWithStats(
        **ValuatorRead.model_validate(valuator).model_dump(),
        total_orders=counts.total,
        completed_orders=counts.completed,
        in_progress_orders=counts.in_progress,
        this_month_orders=counts.this_month,
    )


def _parse_day(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_date(value)
    except InvalidDateRangeError:
        raise BadRequestError(messages.INVALID_DATE) from None


async def _get_valuator_or_404(valuators: ValuatorRepository, valuator_id: int) -> Valuator:
    with translate_db_errors(messages.VALUATOR_FETCH_FAILED):
        valuator = await valuators.get_by_id(valuator_id)
    if valuator is None:
        raise NotFoundError(messages.VALUATOR_NOT_FOUND)
    return valuator


@router.get(
    "",
    response_model=ApiResponse[ValuatorList],
    summary="List Valuators",
    description="List valuators, active first, with total, completed, in-progress and this month's order counts.",
    response_description="Valuators with workload statistics.",
)
async def list_valuators(
    valuators: ValuatorRepoDep, orders: OrderRepoDep, search: Optional[str] = None
) -> ApiResponse[ValuatorList]:
    with translate_db_errors(messages.VALUATORS_FETCH_FAILED):
        rows = await valuators.search(search)
        workload = await orders.valuator_workload([v.code for v in rows], start_of_month(datetime.now()))
    items = [_with_stats(valuator, workload.get(valuator.code, WorkloadCounts())) for valuator in rows]
    return ApiResponse(data=ValuatorList(valuators=items, total=len(items)))


@router.post(
    "",
    response_model=ApiResponse[ValuatorRead],
    status_code=201,
    summary="Create Valuator",
    description="Register a new valuator. Codes are unique.",
    response_description="The created valuator.",
    responses={400: {"description": "Invalid data"}, 409: {"description": "Code already in use"}},
)
async def create_valuator(body: ValuatorCreate, valuators: ValuatorRepoDep) -> ApiResponse[ValuatorRead]:
    if await valuators.get_by_code(body.code) is not None:
        raise ConflictError(messages.VALUATOR_ALREADY_EXISTS)
    try:
        valuator = await valuators.create(Valuator.model_validate(body))
    except IntegrityError:
        await valuators.session.rollback()
        raise ConflictError(messages.VALUATOR_ALREADY_EXISTS) from None
    logger.info("Valuator %s created", valuator.code)
    return ApiResponse(data=ValuatorRead.model_validate(valuator))


@router.get(
    "/{valuator_id}",
    response_model=ApiResponse[ValuatorDetail],
    summary="Get Valuator",
    description="One valuator with statistics, a filtered page of assigned orders and a six-month breakdown.",
    response_description="Valuator details.",
    responses={400: {"description": "Invalid ID or date"}, 404: {"description": "Not found"}},
)
async def get_valuator(
    valuator_id: ValuatorIdDep,
    valuators: ValuatorRepoDep,
    orders: OrderRepoDep,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=VALUATOR_ORDERS_PAGE_SIZE, ge=1, le=100),
    status: Optional[ValuatorOrderFilter] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> ApiResponse[ValuatorDetail]:
    """
    Valuator details.

    - **status**: ``done``, ``in_progress`` or ``pending``.
    - **date_from** / **date_to**: Creation date bounds; ``date_to`` includes the whole day.
    """
    valuator = await _get_valuator_or_404(valuators, valuator_id)
    start = _parse_day(date_from)
    end = _parse_day(date_to)

    now = datetime.now()
    month_start = start_of_month(now)
    stats_since = shift_months(month_start, -(VALUATOR_MONTHLY_STATS_MONTHS - 1))
    with translate_db_errors(messages.VALUATOR_FETCH_FAILED):
        rows, total = await orders.list_for_valuator(
            valuator.code,
            status_filter=status,
            date_from=start_of_day(start) if start else None,
            date_to=end_of_day(end) if end else None,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        workload = await orders.valuator_workload([valuator.code], month_start)
        recent, _ = await orders.list_for_valuator(valuator.code, date_from=stats_since)

    monthly_stats = fill_missing_dates(
        group_by_date_and_count(recent, lambda o: o.created_at, Granularity.month),
        stats_since,
        now,
        Granularity.month,
    )
    return ApiResponse(
        data=ValuatorDetail(
            valuator=_with_stats(valuator, workload[valuator.code]),
            orders=[OrderRead.model_validate(order) for order in rows],
            total=total,
            page=page,
            page_size=page_size,
            monthly_stats=monthly_stats,
        )
    )


@router.patch(
    "/{valuator_id}",
    response_model=ApiResponse[ValuatorRead],
    summary="Update Valuator",
    description="Update a valuator's name, contact details or active flag.",
    response_description="The updated valuator.",
    responses={400: {"description": "Invalid ID or data"}, 404: {"description": "Not found"}},
)
async def update_valuator(
    valuator_id: ValuatorIdDep, body: ValuatorUpdate, valuators: ValuatorRepoDep
) -> ApiResponse[ValuatorRead]:
    valuator = await _get_valuator_or_404(valuators, valuator_id)
    for field in body.model_fields_set:
        value = getattr(body, field)
        if value is None and field in ("first_name", "last_name", "is_active"):
            continue
        setattr(valuator, field, value.strip() if isinstance(value, str) else value)

    with translate_db_errors(messages.VALUATOR_FETCH_FAILED):
        valuator = await valuators.update(valuator)
    logger.info("Valuator %s updated: %s", valuator.code, sorted(body.model_fields_set))
    return ApiResponse(data=ValuatorRead.model_validate(valuator))
