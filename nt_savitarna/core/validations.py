"""
Input validation helpers.

Used by the pydantic request schemas so that validation failures carry the
Lithuanian message shown to the user.
"""

from __future__ import annotations

import re
from typing import Optional

from nt_savitarna.core.models.domain.enums import OrderStatus

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
LITHUANIAN_PHONE_RE = re.compile(r"^(\+370|8)[0-9]{8}$")

PASSWORD_MIN_LENGTH = 6

ORDER_STATUS_VALUES = frozenset(status.value for status in OrderStatus)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_password(password: str) -> bool:
    return len(password) >= PASSWORD_MIN_LENGTH


def _strip_phone(phone: str) -> str:
    return re.sub(r"[^\d+]", "", phone)


def is_valid_lithuanian_phone(phone: str) -> bool:
    """Accepts ``+370XXXXXXXX`` or ``8XXXXXXXX``; spaces and dashes are ignored."""
    return bool(LITHUANIAN_PHONE_RE.match(_strip_phone(phone)))


def format_phone_number(phone: str) -> str:
    """Normalize a phone number to the international ``+370XXXXXXXX`` form.

    >>> format_phone_number("8 612 34567")
    '+37061234567'
    """
    cleaned = _strip_phone(phone)
    if cleaned.startswith("8") and len(cleaned) == 9:
        return "+370" + cleaned[1:]
    return cleaned


def is_valid_order_status(status: Optional[str]) -> bool:
    """``None`` clears the status and is allowed."""
    return status is None or status in ORDER_STATUS_VALUES


def is_pdf_filename(filename: Optional[str]) -> bool:
    """Empty values clear the file and are allowed."""
    if not filename:
        return True
    return filename.lower().endswith(".pdf")
