"""
Response envelopes shared by all endpoints.

Every JSON endpoint answers with ``{"success": bool, "data": ..., "error": ...}``;
authentication endpoints use ``{"success", "message", "user"}`` instead.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Generic success/error envelope."""

    success: bool = True
    data: Optional[DataT] = None
    error: Optional[str] = Field(default=None, description="Localized error message when success is false")


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
