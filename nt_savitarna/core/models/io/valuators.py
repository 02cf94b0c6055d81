"""
Valuator I/O models for the admin valuator endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .orders import OrderRead
from .reports import TimeSeriesPoint


class ValuatorRead(BaseModel):
    """Schema for reading a valuator from the API."""

    id: int
    code: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ValuatorWithStats(ValuatorRead):
    total_orders: int = 0
    completed_orders: int = 0
    in_progress_orders: int = 0
    this_month_orders: int = 0


class ValuatorList(BaseModel):
    valuators: List[ValuatorWithStats]
    total: int


class ValuatorCreate(BaseModel):
    """Schema for creating a valuator."""

    code: str = Field(min_length=1, max_length=32, description="Code stored on assigned orders")
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True

    @field_validator("code", "first_name", "last_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Laukas negali būti tuščias")
        return value


class ValuatorUpdate(BaseModel):
    """Schema for updating a valuator. The code is immutable."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None


class ValuatorDetail(BaseModel):
    """One valuator with a page of assigned orders and a monthly breakdown."""

    valuator: ValuatorWithStats
    orders: List[OrderRead]
    total: int
    page: int
    page_size: int
    monthly_stats: List[TimeSeriesPoint]
