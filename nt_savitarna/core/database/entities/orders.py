"""
Order entity models.

An order is a valuation request submitted through the public order form or the
portal checkout. Orders are linked to clients by ``contact_email`` and to
valuators by the ``priskirta`` valuator code; neither link is a foreign key.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, local_now


class OrderBase(Base):
    """Base fields for a valuation order."""

    token: Optional[str] = Field(default=None, max_length=64, index=True, description="Public order reference")

    # Contact
    contact_name: Optional[str] = Field(default=None, max_length=255)
    contact_email: Optional[str] = Field(default=None, max_length=255, index=True)
    contact_phone: Optional[str] = Field(default=None, max_length=32)
    contact_agree_to_newsletter: Optional[bool] = Field(default=None)

    # Address
    address_municipality: Optional[str] = Field(default=None, max_length=255)
    address_city: Optional[str] = Field(default=None, max_length=255)
    address_street: Optional[str] = Field(default=None, max_length=255)
    address_house_number: Optional[str] = Field(default=None, max_length=32)
    address_latitude: Optional[float] = Field(default=None)
    address_longitude: Optional[float] = Field(default=None)

    # Property
    main_property: Optional[str] = Field(default=None, max_length=255)
    main_property_type: Optional[str] = Field(default=None, max_length=255)
    main_valuation_purpose: Optional[str] = Field(default=None, max_length=255)
    details_indoor_area: Optional[int] = Field(default=None)
    details_land_area: Optional[int] = Field(default=None)
    details_year_built: Optional[int] = Field(default=None)
    details_rooms: Optional[int] = Field(default=None)

    # Service
    service_type: Optional[str] = Field(default=None, max_length=16, description="TYPE_1 .. TYPE_4")
    service_price: Optional[float] = Field(default=None, description="Custom price overriding the catalogue price")
    is_enough_data_for_ai: Optional[bool] = Field(default=None)

    # Valuation result
    price: Optional[float] = Field(default=None)
    price_from: Optional[float] = Field(default=None)
    price_to: Optional[float] = Field(default=None)
    rc_filename: Optional[str] = Field(default=None, max_length=255, description="Report PDF file name")
    rc_saskaita: Optional[str] = Field(default=None, max_length=255, description="Invoice PDF file name")

    # Workflow
    status: Optional[str] = Field(default=None, max_length=16, index=True)
    priskirta: Optional[str] = Field(default=None, max_length=32, index=True, description="Assigned valuator code")
    priskirta_date: Optional[datetime] = Field(default=None)


class Order(OrderBase, table=True):
    """Persistent valuation order.

    Table: uzkl_ivertink1P
    """

    __tablename__ = "uzkl_ivertink1P"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=local_now, index=True)

    @property
    def is_ai_completed(self) -> bool:
        """Automatic valuation whose result was produced by the AI model."""
        return self.service_type == "TYPE_1" and bool(self.is_enough_data_for_ai)

    def __repr__(self) -> str:
        return f"Order(id={self.id}, token={self.token}, status={self.status}, service_type={self.service_type})"
