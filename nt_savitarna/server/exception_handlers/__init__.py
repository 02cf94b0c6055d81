"""
Exception handlers for the NT Savitarna server.

This package contains the API error types, the handlers rendering them as JSON
envelopes and a setup function to register them with the FastAPI application.
"""

from .api_errors import (
    ApiError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PaymentRequiredError,
    UnauthorizedError,
    translate_db_errors,
)
from .global_handler import setup_exception_handlers

__all__ = [
    "ApiError",
    "BadRequestError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "PaymentRequiredError",
    "UnauthorizedError",
    "setup_exception_handlers",
    "translate_db_errors",
]
