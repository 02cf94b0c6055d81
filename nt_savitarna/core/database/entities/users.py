"""
Portal user entity models.

Users are either clients, who see orders placed with their e-mail address, or
administrators.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, local_now


class UserBase(Base):
    """Base fields for a portal user."""

    email: str = Field(max_length=255, unique=True, index=True, description="Login e-mail, stored lower-cased")
    role: str = Field(default="client", max_length=16, description="client or admin")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=32)
    company: Optional[str] = Field(default=None, max_length=255)


class User(UserBase, table=True):
    """Persistent portal user.

    Table: app_users
    """

    __tablename__ = "app_users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=local_now)
    updated_at: datetime = Field(default_factory=local_now, sa_column_kwargs={"onupdate": local_now})

    @property
    def full_name(self) -> Optional[str]:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or None

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
