"""
Async repositories over the SQLModel entities.

Each repository wraps one ``AsyncSession`` and commits its own writes.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .orders import OrderRepository, WorkloadCounts
from .users import UserRepository
from .valuators import ValuatorRepository

__all__ = [
    "AsyncBaseRepository",
    "OrderRepository",
    "QueryBuilder",
    "UserRepository",
    "ValuatorRepository",
    "WorkloadCounts",
]
