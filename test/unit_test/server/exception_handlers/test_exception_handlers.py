"""
Unit tests for server exception handlers.

Tests cover the global handler, the API error envelopes and the mapping of
validation, database and geocoding failures to HTTP responses.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError, OperationalError

from nt_savitarna.core.geo.errors import GeocodingError
from nt_savitarna.core.models.domain import messages
from nt_savitarna.server.exception_handlers import (
    ApiError,
    ConflictError,
    NotFoundError,
    PaymentRequiredError,
    UnauthorizedError,
    setup_exception_handlers,
    translate_db_errors,
)
from nt_savitarna.server.exception_handlers.global_handler import global_exception_handler


class StatusBody(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def _check(cls, value: str) -> str:
        if value != "paid":
            raise ValueError(messages.INVALID_STATUS)
        return value


def build_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError(messages.ORDER_NOT_FOUND)

    @app.get("/declined")
    async def declined():
        raise PaymentRequiredError(messages.PAYMENT_DECLINED)

    @app.get("/login")
    async def login():
        raise UnauthorizedError(messages.INVALID_CREDENTIALS, envelope_key="message")

    @app.post("/status")
    async def status(body: StatusBody):
        return {"status": body.status}

    @app.get("/duplicate")
    async def duplicate():
        raise IntegrityError("INSERT INTO app_users", {}, Exception("UNIQUE constraint failed"))

    @app.get("/db-down")
    async def db_down():
        with translate_db_errors(messages.ORDERS_FETCH_FAILED):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    @app.get("/db-duplicate")
    async def db_duplicate():
        with translate_db_errors(messages.ORDERS_FETCH_FAILED):
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    @app.get("/geocode")
    async def geocode():
        raise GeocodingError("Nominatim request failed", status_code=503, details="busy")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


@pytest.fixture
async def app_client():
    transport = ASGITransport(app=build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        yield client


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.fixture
    def mock_request(self):
        """Create a mock request object."""
        request = Mock(spec=Request)
        request.method = "GET"
        request.url.path = "/api/orders"
        request.query_params = {"status": "paid"}
        request.client = Mock()
        request.client.host = "127.0.0.1"
        return request

    async def test_returns_localized_envelope(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("nt_savitarna.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = json.loads(response.body.decode())
        assert body == {"success": False, "error": messages.INTERNAL_ERROR, "error_id": id(exc)}

    async def test_logs_request_context(self, mock_request):
        exc = ValueError("Test error")

        with patch("nt_savitarna.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        extra = call_args[1]["extra"]
        assert extra["error_type"] == "ValueError"
        assert extra["method"] == "GET"
        assert extra["path"] == "/api/orders"
        assert extra["query_params"] == {"status": "paid"}
        assert extra["client"] == "127.0.0.1"
        assert call_args[1]["exc_info"] is True

    async def test_handles_missing_client(self, mock_request):
        mock_request.client = None

        with patch("nt_savitarna.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, RuntimeError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestSetupExceptionHandlers:
    def test_registers_handlers(self):
        app = FastAPI()
        setup_exception_handlers(app)

        for exc_type in (Exception, ApiError, IntegrityError, GeocodingError):
            assert exc_type in app.exception_handlers


class TestApiErrorEnvelopes:
    """Test the JSON envelopes rendered for raised errors."""

    async def test_api_error(self, app_client):
        response = await app_client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": messages.ORDER_NOT_FOUND}

    async def test_payment_required(self, app_client):
        response = await app_client.get("/declined")

        assert response.status_code == 402
        assert response.json()["error"] == messages.PAYMENT_DECLINED

    async def test_message_envelope(self, app_client):
        response = await app_client.get("/login")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": messages.INVALID_CREDENTIALS}

    def test_status_override(self):
        error = ConflictError("x", status_code=422)

        assert error.status_code == 422
        assert ConflictError("x").status_code == 409

    async def test_unknown_route(self, app_client):
        response = await app_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    async def test_unhandled_exception(self, app_client):
        response = await app_client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == messages.INTERNAL_ERROR
        assert isinstance(body["error_id"], int)


class TestValidationErrors:
    async def test_validator_message_is_returned(self, app_client):
        response = await app_client.post("/status", json={"status": "archived"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": messages.INVALID_STATUS}

    async def test_generic_message_for_schema_errors(self, app_client):
        response = await app_client.post("/status", json={})

        assert response.status_code == 400
        assert response.json()["error"] == messages.INVALID_REQUEST


class TestDatabaseAndGeocodingErrors:
    async def test_integrity_error_is_conflict(self, app_client):
        response = await app_client.get("/duplicate")

        assert response.status_code == 409
        assert response.json()["error"] == messages.DUPLICATE_RECORD

    async def test_translate_db_errors(self, app_client):
        response = await app_client.get("/db-down")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": messages.ORDERS_FETCH_FAILED}

    async def test_translate_db_errors_keeps_integrity_errors(self, app_client):
        response = await app_client.get("/db-duplicate")

        assert response.status_code == 409

    async def test_geocoding_error_is_bad_gateway(self, app_client):
        response = await app_client.get("/geocode")

        assert response.status_code == 502
        assert response.json()["error"] == messages.GEOCODE_FAILED
