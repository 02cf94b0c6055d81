"""Domain enums for the valuation portal."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Role of a portal account."""

    client = "client"
    admin = "admin"


class ServiceType(str, Enum):
    """Valuation service ordered by a client."""

    type_1 = "TYPE_1"  # Automatic valuation
    type_2 = "TYPE_2"  # Valuator assessment
    type_3 = "TYPE_3"  # Price adjustment after inspection
    type_4 = "TYPE_4"  # Property valuation for a bank


class OrderStatus(str, Enum):
    """Workflow status stored on an order."""

    pending = "pending"
    paid = "paid"
    done = "done"
    failed = "failed"


class DisplayStatus(str, Enum):
    """Status shown to clients, derived from service type, AI flag and stored status."""

    completed = "completed"
    paid = "paid"
    pending = "pending"


class AdminOrderFilter(str, Enum):
    """Status filter of the admin order list."""

    all = "all"
    completed = "completed"
    paid = "paid"
    pending = "pending"


class ValuatorOrderFilter(str, Enum):
    """Status filter of a valuator's order list."""

    done = "done"
    in_progress = "in_progress"
    pending = "pending"


class DatePreset(str, Enum):
    """Named shorthand for a report date range."""

    today = "today"
    week = "week"
    month = "month"
    quarter = "quarter"
    year = "year"
    custom = "custom"


class Granularity(str, Enum):
    """Bucket size of a report time series."""

    day = "day"
    week = "week"
    month = "month"


class ReportType(str, Enum):
    """Admin report kinds."""

    orders = "orders"
    revenue = "revenue"
    valuators = "valuators"
    clients = "clients"
    geography = "geography"


class ExportFormat(str, Enum):
    """File formats supported by report export."""

    csv = "csv"
    pdf = "pdf"
