"""Admin dashboard I/O models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_orders: int
    monthly_orders: int
    monthly_revenue: float
    completed_orders: int
    pending_orders: int


class MunicipalityCities(BaseModel):
    municipality: str
    cities: List[str]


class FilterOptions(BaseModel):
    municipalities: List[str]
    cities: List[MunicipalityCities]
    property_types: List[str]
    service_types: List[str]


class SeedResult(BaseModel):
    admin: str
    client: str
    valuators: List[str]
    test_orders: int
