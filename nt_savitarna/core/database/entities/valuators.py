"""
Valuator entity models.

Valuators are staff members who process orders. Orders reference them through
the valuator ``code``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, local_now


class ValuatorBase(Base):
    """Base fields for a valuator."""

    code: str = Field(max_length=32, unique=True, index=True, description="Code stored in Order.priskirta")
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)


class Valuator(ValuatorBase, table=True):
    """Persistent valuator record.

    Table: app_valuators
    """

    __tablename__ = "app_valuators"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=local_now)
    updated_at: datetime = Field(default_factory=local_now, sa_column_kwargs={"onupdate": local_now})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"Valuator(id={self.id}, code={self.code}, active={self.is_active})"
