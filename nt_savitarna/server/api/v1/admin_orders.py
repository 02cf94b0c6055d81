"""
Admin Order Endpoints.

Order management for administrators: search, inspect, update, delete and
geocode orders.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from nt_savitarna.core.database.base import local_now
from nt_savitarna.core.database.entities import Order
from nt_savitarna.core.database.repositories import OrderRepository
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import AdminOrderFilter
from nt_savitarna.core.models.io.common import ApiResponse, MessageResponse
from nt_savitarna.core.models.io.orders import AdminOrderList, AdminOrderUpdate, GeocodeResponse, OrderRead
from nt_savitarna.server.core.constant import ADMIN_ORDERS_DEFAULT_LIMIT
from nt_savitarna.server.exception_handlers import BadRequestError, NotFoundError, translate_db_errors
from nt_savitarna.server.services.deps import GeocoderDep, OrderIdDep, OrderRepoDep, get_admin_user

logger = get_logger(__name__)

router = APIRouter(tags=["admin-orders"], dependencies=[Depends(get_admin_user)])

ADMIN_RESPONSES = {
    401: {"description": "Not logged in"},
    403: {"description": "Not an administrator"},
}


async def _get_order_or_404(orders: OrderRepository, order_id: int) -> Order:
    with translate_db_errors(messages.ORDER_FETCH_FAILED):
        order = await orders.get_by_id(order_id)
    if order is None:
        raise NotFoundError(messages.ORDER_NOT_FOUND)
    return order


@router.get(
    "",
    response_model=ApiResponse[AdminOrderList],
    summary="List Orders",
    description="Search orders by display status and by contact e-mail, token or contact name.",
    response_description="A page of orders and the total number of matches.",
    responses=ADMIN_RESPONSES,
)
async def list_orders(
    orders: OrderRepoDep,
    status: AdminOrderFilter = AdminOrderFilter.all,
    search: Optional[str] = None,
    limit: int = Query(default=ADMIN_ORDERS_DEFAULT_LIMIT, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
) -> ApiResponse[AdminOrderList]:
    """
    List orders for the admin panel.

    - **status**: ``all``, ``completed`` (AI valuation delivered), ``paid`` or ``pending``.
    - **search**: Substring of the contact e-mail, order token or contact name.
    """
    with translate_db_errors(messages.ORDERS_FETCH_FAILED):
        rows, total = await orders.search_admin(status, search, limit, offset)
    return ApiResponse(data=AdminOrderList(orders=[OrderRead.model_validate(o) for o in rows], total=total))


@router.get(
    "/{order_id}",
    response_model=ApiResponse[OrderRead],
    summary="Get Order",
    description="Get one order with all stored fields.",
    responses={**ADMIN_RESPONSES, 400: {"description": "Invalid order ID"}, 404: {"description": "Not found"}},
)
async def get_order(order_id: OrderIdDep, orders: OrderRepoDep) -> ApiResponse[OrderRead]:
    order = await _get_order_or_404(orders, order_id)
    return ApiResponse(data=OrderRead.model_validate(order))


@router.patch(
    "/{order_id}",
    response_model=ApiResponse[OrderRead],
    summary="Update Order",
    description="Update status, price, valuator assignment, report and invoice files or coordinates.",
    response_description="The updated order.",
    responses={
        **ADMIN_RESPONSES,
        400: {"description": "Invalid ID, status, file name or coordinates"},
        404: {"description": "Not found"},
    },
)
async def update_order(order_id: OrderIdDep, body: AdminOrderUpdate, orders: OrderRepoDep) -> ApiResponse[OrderRead]:
    """
    Update an order.

    Only the fields present in the body change. Assigning a valuator stamps
    ``priskirta_date``; an empty ``priskirta`` unassigns the order.
    """
    order = await _get_order_or_404(orders, order_id)
    fields = body.model_fields_set

    if "status" in fields:
        order.status = body.status
    if "price" in fields:
        order.price = body.price
    if "priskirta" in fields:
        code = (body.priskirta or "").strip() or None
        order.priskirta = code
        if code:
            order.priskirta_date = local_now()
    if "rc_filename" in fields:
        order.rc_filename = body.rc_filename
    if "rc_saskaita" in fields:
        order.rc_saskaita = body.rc_saskaita
    if fields & {"address_latitude", "address_longitude"}:
        order.address_latitude = body.address_latitude
        order.address_longitude = body.address_longitude

    with translate_db_errors(messages.ORDER_UPDATE_FAILED):
        order = await orders.update(order)
    logger.info("Order %s updated: %s", order_id, sorted(fields))
    return ApiResponse(data=OrderRead.model_validate(order))


@router.delete(
    "/{order_id}",
    response_model=MessageResponse,
    summary="Delete Order",
    description="Permanently delete an order.",
    responses={**ADMIN_RESPONSES, 400: {"description": "Invalid order ID"}, 404: {"description": "Not found"}},
)
@router.delete("/{order_id}/delete", response_model=MessageResponse, include_in_schema=False)
async def delete_order(order_id: OrderIdDep, orders: OrderRepoDep) -> MessageResponse:
    with translate_db_errors(messages.ORDER_DELETE_FAILED):
        deleted = await orders.delete(order_id)
    if not deleted:
        raise NotFoundError(messages.ORDER_NOT_FOUND)
    logger.info("Order %s deleted", order_id)
    return MessageResponse(message=messages.ORDER_DELETED)


@router.post(
    "/{order_id}/geocode",
    response_model=ApiResponse[GeocodeResponse],
    summary="Geocode Order Address",
    description="Resolve the order address with Nominatim and store the coordinates on the order.",
    response_description="The resolved coordinates.",
    responses={
        **ADMIN_RESPONSES,
        400: {"description": "Invalid order ID or the order has no address"},
        404: {"description": "Order not found or address could not be resolved"},
        502: {"description": "Geocoding service unavailable"},
    },
)
async def geocode_order(order_id: OrderIdDep, orders: OrderRepoDep, geocoder: GeocoderDep) -> ApiResponse[GeocodeResponse]:
    order = await _get_order_or_404(orders, order_id)
    if not (order.address_street or order.address_city or order.address_municipality):
        raise BadRequestError(messages.ADDRESS_MISSING)

    result = await geocoder.geocode_address(order.address_street, order.address_city, order.address_municipality)
    if result is None:
        raise NotFoundError(messages.GEOCODE_NOT_FOUND)

    order.address_latitude = result.lat
    order.address_longitude = result.lng
    with translate_db_errors(messages.ORDER_UPDATE_FAILED):
        await orders.update(order)
    logger.info("Order %s geocoded to %s,%s", order_id, result.lat, result.lng)
    return ApiResponse(data=GeocodeResponse(lat=result.lat, lng=result.lng, display_name=result.display_name))
