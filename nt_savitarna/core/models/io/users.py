"""User I/O models for the admin client list."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class UserRead(BaseModel):
    """Client account without the password hash."""

    id: int
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserList(BaseModel):
    users: List[UserRead]
    total: int
    page: int
    page_size: int
