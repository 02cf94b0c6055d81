"""
Authentication I/O models.

Login and registration bodies treat every field as optional; the auth routes
report missing credentials with their own message.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class _Credentials(BaseModel):
    email: Optional[str] = Field(default=None, description="Login e-mail")
    password: Optional[str] = Field(default=None, description="Plain-text password")


class LoginRequest(_Credentials):
    """Schema for logging in."""


class RegisterRequest(_Credentials):
    """Schema for registering a client account."""

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, description="Lithuanian phone number")
    company: Optional[str] = Field(default=None, max_length=255)


class AuthUser(BaseModel):
    """Public view of the logged-in user."""

    id: int
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: Optional[AuthUser] = None
