"""
Request dependencies.

Database session and repositories, the authenticated user taken from the
session cookie, role guards, path parameter parsing and the geocoding client.
"""

from typing import Annotated, Optional

from fastapi import Cookie, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from nt_savitarna.core.database import get_session
from nt_savitarna.core.database.repositories import OrderRepository, UserRepository, ValuatorRepository
from nt_savitarna.core.geo import NominatimClient
from nt_savitarna.core.models.domain.messages import (
    FORBIDDEN,
    INVALID_ORDER_ID,
    INVALID_VALUATOR_ID,
    NOT_AUTHENTICATED,
)
from nt_savitarna.server.core.config import settings
from nt_savitarna.server.core.constant import AUTH_COOKIE_NAME
from nt_savitarna.server.core.security import TokenPayload, decode_access_token
from nt_savitarna.server.exception_handlers import BadRequestError, ForbiddenError, UnauthorizedError

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_order_repository(session: SessionDep) -> OrderRepository:
    return OrderRepository(session)


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


def get_valuator_repository(session: SessionDep) -> ValuatorRepository:
    return ValuatorRepository(session)


OrderRepoDep = Annotated[OrderRepository, Depends(get_order_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
ValuatorRepoDep = Annotated[ValuatorRepository, Depends(get_valuator_repository)]


async def get_current_user(
    token: Annotated[Optional[str], Cookie(alias=AUTH_COOKIE_NAME)] = None,
) -> TokenPayload:
    """Claims of the valid session cookie; 401 when missing or invalid."""
    payload = decode_access_token(token) if token else None
    if payload is None:
        raise UnauthorizedError(NOT_AUTHENTICATED)
    return payload


CurrentUserDep = Annotated[TokenPayload, Depends(get_current_user)]


async def get_admin_user(user: CurrentUserDep) -> TokenPayload:
    """Logged-in administrator; 403 for other roles."""
    if not user.is_admin:
        raise ForbiddenError(FORBIDDEN)
    return user


AdminUserDep = Annotated[TokenPayload, Depends(get_admin_user)]


def _parse_id(raw: str, message: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise BadRequestError(message) from None
    if value < 1:
        raise BadRequestError(message)
    return value


def parse_order_id(order_id: str) -> int:
    return _parse_id(order_id, INVALID_ORDER_ID)


def parse_valuator_id(valuator_id: str) -> int:
    return _parse_id(valuator_id, INVALID_VALUATOR_ID)


OrderIdDep = Annotated[int, Depends(parse_order_id)]
ValuatorIdDep = Annotated[int, Depends(parse_valuator_id)]


def get_geocoder() -> NominatimClient:
    geocoding = settings.geocoding
    return NominatimClient(
        geocoding.url,
        user_agent=geocoding.user_agent,
        country_codes=geocoding.country_codes,
        timeout=geocoding.timeout,
    )


GeocoderDep = Annotated[NominatimClient, Depends(get_geocoder)]
