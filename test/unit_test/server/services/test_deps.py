"""Unit tests for request dependencies."""

import pytest

from nt_savitarna.core.geo import NominatimClient
from nt_savitarna.core.models.domain import messages
from nt_savitarna.server.core.security import TokenPayload, create_access_token
from nt_savitarna.server.exception_handlers import BadRequestError, ForbiddenError, UnauthorizedError
from nt_savitarna.server.services.deps import (
    get_admin_user,
    get_current_user,
    get_geocoder,
    parse_order_id,
    parse_valuator_id,
)


class TestPathIds:
    @pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), (" 7 ", 7)])
    def test_valid_ids(self, raw, expected):
        assert parse_order_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "0", "-3", "1.5", ""])
    def test_invalid_order_ids(self, raw):
        with pytest.raises(BadRequestError) as exc_info:
            parse_order_id(raw)

        assert exc_info.value.message == messages.INVALID_ORDER_ID

    def test_invalid_valuator_id(self):
        with pytest.raises(BadRequestError) as exc_info:
            parse_valuator_id("x")

        assert exc_info.value.message == messages.INVALID_VALUATOR_ID


class TestCurrentUser:
    """Test the session cookie guards."""

    async def test_missing_cookie(self):
        with pytest.raises(UnauthorizedError):
            await get_current_user(None)

    async def test_invalid_cookie(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            await get_current_user("garbage")

        assert exc_info.value.message == messages.NOT_AUTHENTICATED

    async def test_valid_cookie(self):
        user = await get_current_user(create_access_token(3, "jonas@example.lt", "client"))

        assert user == TokenPayload(user_id=3, email="jonas@example.lt", role="client")

    async def test_admin_guard(self):
        admin = TokenPayload(user_id=1, email="admin@1partner.lt", role="admin")

        assert await get_admin_user(admin) is admin

    async def test_admin_guard_rejects_clients(self):
        with pytest.raises(ForbiddenError) as exc_info:
            await get_admin_user(TokenPayload(user_id=2, email="a@b.lt", role="client"))

        assert exc_info.value.status_code == 403


def test_geocoder_uses_settings():
    assert isinstance(get_geocoder(), NominatimClient)
