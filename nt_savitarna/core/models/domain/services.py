"""
Service catalogue and order status rules.

These rules are shared by the client order views, the admin dashboard and the
reporting layer. They operate on anything that exposes the order attributes
(``service_type``, ``service_price``, ``is_enough_data_for_ai``, ``status``),
so they work both with ``Order`` entities and with plain test doubles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

from .enums import DisplayStatus, OrderStatus, ServiceType


@dataclass(frozen=True)
class ServiceInfo:
    id: str
    name: str
    name_lt: str
    price: float


SERVICE_TYPES: Dict[str, ServiceInfo] = {
    ServiceType.type_1.value: ServiceInfo("TYPE_1", "Automatic Valuation", "Automatinis vertinimas", 8),
    ServiceType.type_2.value: ServiceInfo("TYPE_2", "Valuator Assessment", "Vertintojo nustatymas", 30),
    # TYPE_3 and TYPE_4 are quoted individually
    ServiceType.type_3.value: ServiceInfo(
        "TYPE_3", "Price Adjustment (Inspection)", "Kainos patikslinimas (Apžiūra)", 0
    ),
    ServiceType.type_4.value: ServiceInfo("TYPE_4", "Property Valuation (Bank)", "Turto vertinimas (Bankui)", 0),
}

UNKNOWN_SERVICE = ServiceInfo("unknown", "Unknown Service", "Nežinoma paslauga", 0)

# Shorter labels used in report tables and charts
SERVICE_TYPE_REPORT_LABELS: Dict[str, str] = {
    "TYPE_1": "Automatinis vertinimas",
    "TYPE_2": "Vertintojo nustatymas",
    "TYPE_3": "Kainos patikslinimas",
    "TYPE_4": "Turto vertinimas",
}

STATUS_LABELS: Dict[DisplayStatus, str] = {
    DisplayStatus.completed: "Atlikta",
    DisplayStatus.paid: "Apmokėta / Vykdoma",
    DisplayStatus.pending: "Laukiama apmokėjimo",
}

REPORT_STATUS_LABELS: Dict[str, str] = {
    OrderStatus.pending.value: "Laukiama",
    OrderStatus.paid.value: "Apmokėta",
    OrderStatus.done.value: "Atlikta",
    OrderStatus.failed.value: "Nepavyko",
}

NOT_SPECIFIED = "Nenurodyta"
UNKNOWN_CLIENT = "Nežinomas"


@dataclass(frozen=True)
class ValuatorContact:
    name: str
    phone: Optional[str]
    email: Optional[str]


DEFAULT_VALUATOR = ValuatorContact(name="1Partner Vertintojai", phone="+370 600 00000", email="info@1partner.lt")


def get_service_info(service_type: Optional[str]) -> ServiceInfo:
    """Catalogue entry for a service type; unknown types fall back to the automatic valuation."""
    if not service_type:
        return UNKNOWN_SERVICE
    return SERVICE_TYPES.get(service_type, SERVICE_TYPES[ServiceType.type_1.value])


def is_valid_service_type(service_type: Optional[str]) -> bool:
    return service_type in SERVICE_TYPES


def get_order_price(service_type: Optional[str], service_price: Optional[float] = None) -> float:
    """Price charged for an order.

    A custom ``service_price`` wins over the catalogue price. Orders without a
    service type are worth nothing.
    """
    if not service_type:
        return 0.0
    if service_price is not None:
        return float(service_price)
    return float(get_service_info(service_type).price)


def is_ai_completed(order: Any) -> bool:
    return order.service_type == ServiceType.type_1.value and order.is_enough_data_for_ai is True


def get_display_status(
    service_type: Optional[str],
    is_enough_data_for_ai: Optional[bool],
    status: Optional[str],
) -> DisplayStatus:
    """Status shown to clients."""
    if service_type == ServiceType.type_1.value and is_enough_data_for_ai is True:
        return DisplayStatus.completed
    if status in (OrderStatus.paid.value, OrderStatus.done.value):
        return DisplayStatus.paid
    return DisplayStatus.pending


def can_download(rc_filename: Optional[str], display_status: DisplayStatus) -> bool:
    return bool(rc_filename) and display_status == DisplayStatus.completed


def get_pdf_download_url(filename: Optional[str], base_url: str) -> Optional[str]:
    if not filename:
        return None
    return f"{base_url}{quote(filename, safe='')}"


def is_completed(order: Any) -> bool:
    """Completed from the valuator's point of view: AI result delivered or marked done."""
    return is_ai_completed(order) or order.status == OrderStatus.done.value


def is_revenue_eligible(order: Any) -> bool:
    """Orders that were paid for or delivered count towards revenue."""
    return order.status in (OrderStatus.paid.value, OrderStatus.done.value) or is_ai_completed(order)


def report_status_key(order: Any) -> str:
    if is_ai_completed(order):
        return OrderStatus.done.value
    return order.status or OrderStatus.pending.value


def report_status_label(key: str) -> str:
    return REPORT_STATUS_LABELS.get(key, key)


def service_type_label(service_type: Optional[str]) -> str:
    if not service_type:
        return NOT_SPECIFIED
    return SERVICE_TYPE_REPORT_LABELS.get(service_type, service_type)
