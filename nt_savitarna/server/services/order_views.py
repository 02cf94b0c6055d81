"""
Client-facing order views.

Adds the derived display status, service name, price, download links and the
valuator contact to an order as the client sees it.
"""

from typing import Dict, Iterable, List, Optional

from nt_savitarna.core.database.entities import Order, Valuator
from nt_savitarna.core.database.repositories import ValuatorRepository
from nt_savitarna.core.models.domain.services import (
    DEFAULT_VALUATOR,
    STATUS_LABELS,
    can_download,
    get_display_status,
    get_order_price,
    get_pdf_download_url,
    get_service_info,
)
from nt_savitarna.core.models.io.orders import ClientOrderRead, OrderRead, ValuatorContactRead
from nt_savitarna.server.core.config import settings


def valuator_contact(valuator: Optional[Valuator]) -> ValuatorContactRead:
    if valuator is None:
        return ValuatorContactRead(
            name=DEFAULT_VALUATOR.name, phone=DEFAULT_VALUATOR.phone, email=DEFAULT_VALUATOR.email
        )
    return ValuatorContactRead(name=valuator.full_name, phone=valuator.phone, email=valuator.email)


def to_client_order(order: Order, valuator: Optional[Valuator] = None) -> ClientOrderRead:
    display_status = get_display_status(order.service_type, order.is_enough_data_for_ai, order.status)
    base_url = settings.pdf_base_url
    return ClientOrderRead(
        **OrderRead.model_validate(order).model_dump(),
        display_status=display_status,
        status_label=STATUS_LABELS[display_status],
        service_name=get_service_info(order.service_type).name_lt,
        order_price=get_order_price(order.service_type, order.service_price),
        can_download=can_download(order.rc_filename, display_status),
        report_url=get_pdf_download_url(order.rc_filename, base_url),
        invoice_url=get_pdf_download_url(order.rc_saskaita, base_url),
        valuator=valuator_contact(valuator),
    )


async def to_client_orders(orders: Iterable[Order], valuators: ValuatorRepository) -> List[ClientOrderRead]:
    """Client views of ``orders``, looking up all assigned valuators in one query."""
    orders = list(orders)
    codes = sorted({order.priskirta for order in orders if order.priskirta})
    by_code: Dict[str, Valuator] = await valuators.get_by_codes(codes)
    return [to_client_order(order, by_code.get(order.priskirta or "")) for order in orders]
