"""
Database entities.

Importing this package registers every table with the SQLModel metadata.
"""

from .orders import Order, OrderBase
from .users import User, UserBase
from .valuators import Valuator, ValuatorBase

__all__ = [
    "Order",
    "OrderBase",
    "User",
    "UserBase",
    "Valuator",
    "ValuatorBase",
]
