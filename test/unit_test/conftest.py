"""Shared builders for unit tests.

The builders return unsaved entities so that the same fixtures feed the pure
reporting tests and the repository and API tests.
"""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Any, Callable

import pytest

from nt_savitarna.core.database.entities import Order, User, Valuator


@pytest.fixture
def make_order() -> Callable[..., Order]:
    """Build an ``Order``; every keyword overrides a default field."""
    counter = itertools.count(1)

    def _make(**overrides: Any) -> Order:
        number = next(counter)
        data = {
            "token": f"NT-TEST{number:04d}",
            "contact_name": "Jonas Klientas",
            "contact_email": "klientas@example.lt",
            "address_municipality": "Vilniaus m. sav.",
            "address_city": "Vilnius",
            "address_street": "Gedimino pr.",
            "address_house_number": str(number),
            "main_property_type": "Butas",
            "service_type": "TYPE_2",
            "status": "paid",
            "created_at": datetime.now(),
        }
        data.update(overrides)
        return Order(**data)

    return _make


@pytest.fixture
def make_user() -> Callable[..., User]:
    counter = itertools.count(1)

    def _make(**overrides: Any) -> User:
        number = next(counter)
        data = {
            "email": f"user{number}@example.lt",
            "password_hash": "not-a-real-hash",
            "role": "client",
            "first_name": "Vardenis",
            "last_name": f"Pavardenis{number}",
            "created_at": datetime.now(),
        }
        data.update(overrides)
        return User(**data)

    return _make


@pytest.fixture
def make_valuator() -> Callable[..., Valuator]:
    counter = itertools.count(1)

    def _make(**overrides: Any) -> Valuator:
        number = next(counter)
        data = {
            "code": f"VAL{number:03d}",
            "first_name": "Jonas",
            "last_name": f"Vertintojas{number}",
            "phone": "+37061234567",
            "email": f"val{number}@vertintojas.lt",
            "is_active": True,
        }
        data.update(overrides)
        return Valuator(**data)

    return _make
