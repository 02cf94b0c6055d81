"""Lithuanian-locale formatting of numbers, money and dates for reports and exports."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from .date_ranges import InvalidDateRangeError, parse_date

GROUP_SEPARATOR = "\u00a0"
DECIMAL_SEPARATOR = ","
EMPTY_DATE = "—"

MONTHS_GENITIVE = (
    "sausio",
    "vasario",
    "kovo",
    "balandžio",
    "gegužės",
    "birželio",
    "liepos",
    "rugpjūčio",
    "rugsėjo",
    "spalio",
    "lapkričio",
    "gruodžio",
)

MONTHS_SHORT = (
    "saus.",
    "vas.",
    "kov.",
    "bal.",
    "geg.",
    "birž.",
    "liep.",
    "rugp.",
    "rugs.",
    "spal.",
    "lapkr.",
    "gruod.",
)


def _group_thousands(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return GROUP_SEPARATOR.join(groups)


def _format_decimal(value: float, max_decimals: int) -> str:
    sign = "-" if value < 0 else ""
    text = f"{abs(value):.{max_decimals}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    result = sign + _group_thousands(whole)
    if fraction:
        result += DECIMAL_SEPARATOR + fraction
    return result


def format_number(value: float) -> str:
    """``1234567`` → ``1 234 567`` (non-breaking spaces)."""
    return _format_decimal(value, 3)


def format_currency(value: float) -> str:
    """``1234.56`` → ``1 234,56 €``; whole amounts drop the decimals."""
    return f"{_format_decimal(value, 2)}{GROUP_SEPARATOR}€"


def format_amount(value: float) -> str:
    """Plain two-decimal amount used in CSV and PDF tables."""
    return f"{value:.2f}"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_date_iso(value: Union[datetime, date]) -> str:
    return value.strftime("%Y-%m-%d")


def format_date_lt(value: Optional[Union[datetime, date, str]], style: str = "short") -> str:
    """Format a date the way Lithuanian users read it.

    ``short`` → ``2024-03-15``, ``long`` → ``2024 m. kovo 15 d.``,
    ``month`` → ``2024 m. kov.``. Missing or malformed values render as a dash.
    """
    if not value:
        return EMPTY_DATE
    try:
        parsed = parse_date(value)
    except InvalidDateRangeError:
        return EMPTY_DATE

    if style == "long":
        return f"{parsed.year} m. {MONTHS_GENITIVE[parsed.month - 1]} {parsed.day} d."
    if style == "month":
        return f"{parsed.year} m. {MONTHS_SHORT[parsed.month - 1]}"
    return format_date_iso(parsed)


def format_datetime_lt(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")
