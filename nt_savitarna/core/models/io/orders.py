"""
Order I/O models for the client and admin order endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nt_savitarna.core.geo.coordinates import is_valid_latitude, is_valid_longitude
from nt_savitarna.core.models.domain.enums import DisplayStatus
from nt_savitarna.core.models.domain.messages import (
    INVALID_COORDINATES,
    INVALID_STATUS,
    INVOICE_MUST_BE_PDF,
    REPORT_MUST_BE_PDF,
)
from nt_savitarna.core.validations import is_pdf_filename, is_valid_order_status


class OrderRead(BaseModel):
    """Schema for reading an order from the API."""

    id: int
    token: Optional[str] = None
    created_at: datetime

    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_agree_to_newsletter: Optional[bool] = None

    address_municipality: Optional[str] = None
    address_city: Optional[str] = None
    address_street: Optional[str] = None
    address_house_number: Optional[str] = None
    address_latitude: Optional[float] = None
    address_longitude: Optional[float] = None

    main_property: Optional[str] = None
    main_property_type: Optional[str] = None
    main_valuation_purpose: Optional[str] = None
    details_indoor_area: Optional[int] = None
    details_land_area: Optional[int] = None
    details_year_built: Optional[int] = None
    details_rooms: Optional[int] = None

    service_type: Optional[str] = None
    service_price: Optional[float] = None
    is_enough_data_for_ai: Optional[bool] = None

    price: Optional[float] = None
    price_from: Optional[float] = None
    price_to: Optional[float] = None
    rc_filename: Optional[str] = None
    rc_saskaita: Optional[str] = None

    status: Optional[str] = None
    priskirta: Optional[str] = Field(default=None, description="Assigned valuator code")
    priskirta_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class ValuatorContactRead(BaseModel):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class ClientOrderRead(OrderRead):
    """Order as shown to its client, with the derived status and download links."""

    display_status: DisplayStatus
    status_label: str
    service_name: str = Field(description="Lithuanian service name")
    order_price: float = Field(description="Custom price or the catalogue price")
    can_download: bool
    report_url: Optional[str] = None
    invoice_url: Optional[str] = None
    valuator: Optional[ValuatorContactRead] = None


class AdminOrderUpdate(BaseModel):
    """Schema for an admin order update. Only the fields present in the body are applied."""

    status: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    priskirta: Optional[str] = Field(default=None, description="Valuator code; empty or null unassigns")
    rc_filename: Optional[str] = None
    rc_saskaita: Optional[str] = None
    address_latitude: Optional[float] = None
    address_longitude: Optional[float] = None

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: Optional[str]) -> Optional[str]:
        if not is_valid_order_status(value):
            raise ValueError(INVALID_STATUS)
        return value

    @field_validator("rc_filename")
    @classmethod
    def _check_report_file(cls, value: Optional[str]) -> Optional[str]:
        if not is_pdf_filename(value):
            raise ValueError(REPORT_MUST_BE_PDF)
        return value or None

    @field_validator("rc_saskaita")
    @classmethod
    def _check_invoice_file(cls, value: Optional[str]) -> Optional[str]:
        if not is_pdf_filename(value):
            raise ValueError(INVOICE_MUST_BE_PDF)
        return value or None

    @model_validator(mode="after")
    def _check_coordinates(self):
        lat, lng = self.address_latitude, self.address_longitude
        if (lat is None) != (lng is None):
            raise ValueError(INVALID_COORDINATES)
        if lat is not None and not (is_valid_latitude(lat) and is_valid_longitude(lng)):
            raise ValueError(INVALID_COORDINATES)
        return self


class AdminOrderList(BaseModel):
    orders: List[OrderRead]
    total: int


class GeocodeResponse(BaseModel):
    lat: float
    lng: float
    display_name: str


class CheckoutRequest(BaseModel):
    """Schema for placing an order through the portal checkout."""

    service_type: Optional[str] = Field(default=None, description="TYPE_1 .. TYPE_4")
    address_municipality: Optional[str] = Field(default=None, max_length=255)
    address_city: Optional[str] = Field(default=None, max_length=255)
    address_street: Optional[str] = Field(default=None, max_length=255)
    address_house_number: Optional[str] = Field(default=None, max_length=32)
    main_property_type: Optional[str] = Field(default=None, max_length=255)
    main_valuation_purpose: Optional[str] = Field(default=None, max_length=255)


class CheckoutResponse(BaseModel):
    order_id: int
    token: str
    service_type: str
    amount: float
