"""
Checkout Endpoint.

Places an order for a catalogue service. Payments go through a demo gateway
that approves a configurable share of attempts (``CHECKOUT_SUCCESS_RATE``).
"""

import random
import secrets

from fastapi import APIRouter

from nt_savitarna.core.database.entities import Order
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import OrderStatus
from nt_savitarna.core.models.domain.services import get_order_price, is_valid_service_type
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.core.models.io.orders import CheckoutRequest, CheckoutResponse
from nt_savitarna.server.core.config import settings
from nt_savitarna.server.exception_handlers import BadRequestError, PaymentRequiredError, translate_db_errors
from nt_savitarna.server.services.deps import CurrentUserDep, OrderRepoDep, UserRepoDep

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


def payment_approved() -> bool:
    return random.random() < settings.checkout_success_rate


def new_order_token() -> str:
    return f"NT-{secrets.token_hex(6).upper()}"


@router.post(
    "",
    response_model=ApiResponse[CheckoutResponse],
    summary="Checkout",
    description="Pay for a valuation service and place the order.",
    response_description="Reference of the placed order.",
    responses={
        400: {"description": "Unknown service"},
        401: {"description": "Not logged in"},
        402: {"description": "Payment declined"},
    },
)
async def checkout(
    body: CheckoutRequest, user: CurrentUserDep, orders: OrderRepoDep, users: UserRepoDep
) -> ApiResponse[CheckoutResponse]:
    """
    Place an order.

    - **service_type**: One of ``TYPE_1`` .. ``TYPE_4``.
    - Address and property fields are optional and copied onto the order.
    """
    if not is_valid_service_type(body.service_type):
        raise BadRequestError(messages.INVALID_SERVICE)

    if not payment_approved():
        logger.info("Demo payment declined for user %s (%s)", user.user_id, body.service_type)
        raise PaymentRequiredError(messages.PAYMENT_DECLINED)

    with translate_db_errors(messages.CHECKOUT_FAILED):
        account = await users.get_by_id(user.user_id)
        order = Order(
            token=new_order_token(),
            contact_name=account.full_name if account else None,
            contact_email=user.email.lower(),
            contact_phone=account.phone if account else None,
            service_type=body.service_type,
            service_price=get_order_price(body.service_type),
            status=OrderStatus.paid.value,
            **body.model_dump(exclude={"service_type"}),
        )
        order = await orders.create(order)

    logger.info("Order %s placed by user %s", order.id, user.user_id)
    return ApiResponse(
        data=CheckoutResponse(
            order_id=order.id, token=order.token, service_type=order.service_type, amount=order.service_price
        )
    )
