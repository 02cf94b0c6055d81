"""
API error types and their exception handlers.

Routes raise ``ApiError`` subclasses carrying a Lithuanian message; the
handlers below render them as ``{"success": false, "error": <message>}``.
Authentication routes answer with ``message`` instead of ``error``.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from nt_savitarna.core.geo.errors import GeocodingError
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain.messages import DUPLICATE_RECORD, GEOCODE_FAILED, INVALID_REQUEST
from nt_savitarna.core.models.io.common import ErrorResponse

logger = get_logger(__name__)


class ApiError(Exception):
    """Error with an HTTP status and a user-facing message."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None, envelope_key: str = "error") -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.envelope_key = envelope_key

    def to_content(self) -> Dict[str, Any]:
        return {"success": False, self.envelope_key: self.message}


class BadRequestError(ApiError):
    status_code = 400


class UnauthorizedError(ApiError):
    status_code = 401


class PaymentRequiredError(ApiError):
    status_code = 402


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


@contextmanager
def translate_db_errors(message: str, envelope_key: str = "error") -> Iterator[None]:
    """Re-raise database failures as a 500 ``ApiError`` carrying ``message``.

    Integrity errors pass through to their own handler.
    """
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        raise ApiError(message, status_code=500, envelope_key=envelope_key) from e


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc.__cause__)
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


def _validation_message(exc: RequestValidationError) -> str:
    """First validator message raised by the portal's own validators, or the generic one."""
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        cause = ctx.get("error")
        if isinstance(cause, ValueError) and str(cause):
            return str(cause)
    return INVALID_REQUEST


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Request validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return error_response(400, _validation_message(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error in {request.method} {request.url.path}: {exc.orig}")
    return error_response(409, DUPLICATE_RECORD)


async def geocoding_error_handler(request: Request, exc: GeocodingError) -> JSONResponse:
    logger.error(
        f"Geocoding failed in {request.method} {request.url.path}: {exc}",
        extra={"status_code": exc.status_code, "details": exc.details},
    )
    return error_response(502, GEOCODE_FAILED)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


def register_api_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(GeocodingError, geocoding_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
