"""
Client Order Endpoints.

Clients see the orders placed with their e-mail address. Administrators may
open any order through the same detail endpoint.
"""

from typing import List

from fastapi import APIRouter

from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.core.models.io.orders import ClientOrderRead
from nt_savitarna.server.exception_handlers import ForbiddenError, NotFoundError, translate_db_errors
from nt_savitarna.server.services.deps import CurrentUserDep, OrderIdDep, OrderRepoDep, ValuatorRepoDep
from nt_savitarna.server.services.order_views import to_client_orders

logger = get_logger(__name__)

router = APIRouter(tags=["orders"])


@router.get(
    "",
    response_model=ApiResponse[List[ClientOrderRead]],
    summary="List My Orders",
    description="List the current user's orders, newest first, with display status and download links.",
    response_description="The user's orders.",
    responses={401: {"description": "Not logged in"}},
)
async def list_my_orders(
    user: CurrentUserDep, orders: OrderRepoDep, valuators: ValuatorRepoDep
) -> ApiResponse[List[ClientOrderRead]]:
    with translate_db_errors(messages.ORDERS_FETCH_FAILED):
        rows = await orders.list_by_email(user.email)
        data = await to_client_orders(rows, valuators)
    return ApiResponse(data=data)


@router.get(
    "/{order_id}",
    response_model=ApiResponse[ClientOrderRead],
    summary="Get Order",
    description="Get one order. Clients may only open orders placed with their own e-mail.",
    response_description="The order.",
    responses={
        400: {"description": "Invalid order ID"},
        401: {"description": "Not logged in"},
        403: {"description": "Order belongs to another client"},
        404: {"description": "Order not found"},
    },
)
async def get_my_order(
    order_id: OrderIdDep, user: CurrentUserDep, orders: OrderRepoDep, valuators: ValuatorRepoDep
) -> ApiResponse[ClientOrderRead]:
    with translate_db_errors(messages.ORDER_FETCH_FAILED):
        order = await orders.get_by_id(order_id)
    if order is None:
        raise NotFoundError(messages.ORDER_NOT_FOUND)

    owner = (order.contact_email or "").strip().lower()
    if not user.is_admin and owner != user.email.lower():
        logger.warning("User %s tried to open order %s of another client", user.user_id, order_id)
        raise ForbiddenError(messages.ORDER_ACCESS_DENIED)

    (data,) = await to_client_orders([order], valuators)
    return ApiResponse(data=data)
