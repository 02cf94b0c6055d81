"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def local_now() -> datetime:
    """Current local wall time as a naive datetime.

    Timestamp columns use the same clock as the report date ranges, so an order
    placed just after local midnight belongs to the new day.
    """
    return datetime.now()
