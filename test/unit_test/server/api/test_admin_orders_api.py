"""Tests for the admin order endpoints."""

from datetime import datetime, timedelta

import httpx
import pytest

from nt_savitarna.core.database.repositories import OrderRepository
from nt_savitarna.core.geo import NominatimClient
from nt_savitarna.core.models.domain import messages
from nt_savitarna.server.main import app
from nt_savitarna.server.services.deps import get_geocoder

MOCK_NOMINATIM_URL = "http://mock.nominatim/search"


@pytest.fixture
def geocoder_responses():
    """Route geocoding through a mock Nominatim that answers from this list."""
    responses = []
    queries = []

    def handler(request: httpx.Request) -> httpx.Response:
        queries.append(request.url.params["q"])
        return responses.pop(0)

    def override() -> NominatimClient:
        return NominatimClient(MOCK_NOMINATIM_URL, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    app.dependency_overrides[get_geocoder] = override
    yield responses, queries
    app.dependency_overrides.pop(get_geocoder, None)


@pytest.fixture
async def orders(session, make_order):
    """A completed AI order, a paid order and a pending order."""
    repo = OrderRepository(session)
    now = datetime.now()
    return {
        "completed": await repo.create(
            make_order(
                service_type="TYPE_1",
                is_enough_data_for_ai=True,
                status=None,
                contact_name="Ona Onaitė",
                contact_email="ona@example.lt",
                created_at=now - timedelta(days=2),
            )
        ),
        "paid": await repo.create(make_order(status="paid", created_at=now - timedelta(days=1))),
        "pending": await repo.create(make_order(status=None, token="NT-PAIESKA", created_at=now)),
    }


class TestListOrders:
    """Test GET /api/admin/orders."""

    async def test_all(self, as_admin, orders):
        response = await as_admin.get("/api/admin/orders")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 3
        assert [o["id"] for o in data["orders"]] == [orders["pending"].id, orders["paid"].id, orders["completed"].id]

    @pytest.mark.parametrize("status", ["completed", "paid", "pending"])
    async def test_status_filter(self, as_admin, orders, status):
        response = await as_admin.get("/api/admin/orders", params={"status": status})

        data = response.json()["data"]
        assert data["total"] == 1
        assert data["orders"][0]["id"] == orders[status].id

    @pytest.mark.parametrize("search", ["ona@", "onaitė", "paieska"])
    async def test_search(self, as_admin, orders, search):
        response = await as_admin.get("/api/admin/orders", params={"search": search})

        assert response.json()["data"]["total"] == 1

    async def test_pagination(self, as_admin, orders):
        response = await as_admin.get("/api/admin/orders", params={"limit": 2, "offset": 2})

        data = response.json()["data"]
        assert data["total"] == 3
        assert [o["id"] for o in data["orders"]] == [orders["completed"].id]

    async def test_unknown_status(self, as_admin):
        response = await as_admin.get("/api/admin/orders", params={"status": "archived"})

        assert response.status_code == 400

    async def test_requires_admin(self, as_client):
        response = await as_client.get("/api/admin/orders")

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": messages.FORBIDDEN}

    async def test_requires_login(self, client):
        response = await client.get("/api/admin/orders")

        assert response.status_code == 401


class TestGetOrder:
    async def test_get(self, as_admin, orders):
        response = await as_admin.get(f"/api/admin/orders/{orders['paid'].id}")

        assert response.status_code == 200
        assert response.json()["data"]["token"] == orders["paid"].token

    async def test_not_found(self, as_admin):
        response = await as_admin.get("/api/admin/orders/999")

        assert response.status_code == 404

    async def test_invalid_id(self, as_admin):
        response = await as_admin.get("/api/admin/orders/0")

        assert response.status_code == 400
        assert response.json()["error"] == messages.INVALID_ORDER_ID


class TestUpdateOrder:
    """Test PATCH /api/admin/orders/{id}."""

    async def test_update_fields(self, as_admin, orders):
        order_id = orders["paid"].id

        response = await as_admin.patch(
            f"/api/admin/orders/{order_id}",
            json={
                "status": "done",
                "price": 125000,
                "priskirta": "VAL001",
                "rc_filename": "ataskaita.pdf",
                "rc_saskaita": "saskaita.PDF",
                "address_latitude": 54.6872,
                "address_longitude": 25.2797,
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "done"
        assert data["price"] == 125000
        assert data["priskirta"] == "VAL001"
        assert data["priskirta_date"] is not None
        assert data["rc_filename"] == "ataskaita.pdf"
        assert data["rc_saskaita"] == "saskaita.PDF"
        assert data["address_latitude"] == pytest.approx(54.6872)

    async def test_only_sent_fields_change(self, as_admin, orders):
        order = orders["paid"]

        response = await as_admin.patch(f"/api/admin/orders/{order.id}", json={"price": 1})

        data = response.json()["data"]
        assert data["price"] == 1
        assert data["status"] == "paid"

    async def test_unassign_and_clear_files(self, as_admin, session, make_order):
        order = await OrderRepository(session).create(make_order(priskirta="VAL001", rc_filename="a.pdf"))

        response = await as_admin.patch(
            f"/api/admin/orders/{order.id}", json={"priskirta": "", "rc_filename": "", "status": None}
        )

        data = response.json()["data"]
        assert data["priskirta"] is None
        assert data["rc_filename"] is None
        assert data["status"] is None

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"status": "archived"}, messages.INVALID_STATUS),
            ({"rc_filename": "ataskaita.docx"}, messages.REPORT_MUST_BE_PDF),
            ({"rc_saskaita": "saskaita.txt"}, messages.INVOICE_MUST_BE_PDF),
            ({"address_latitude": 54.6}, messages.INVALID_COORDINATES),
            ({"address_latitude": 95.0, "address_longitude": 25.0}, messages.INVALID_COORDINATES),
        ],
    )
    async def test_invalid_body(self, as_admin, orders, body, message):
        response = await as_admin.patch(f"/api/admin/orders/{orders['paid'].id}", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": message}

    async def test_negative_price(self, as_admin, orders):
        response = await as_admin.patch(f"/api/admin/orders/{orders['paid'].id}", json={"price": -5})

        assert response.status_code == 400
        assert response.json()["error"] == messages.INVALID_REQUEST

    async def test_not_found(self, as_admin):
        response = await as_admin.patch("/api/admin/orders/999", json={"status": "done"})

        assert response.status_code == 404


class TestDeleteOrder:
    async def test_delete(self, as_admin, session, orders):
        order_id = orders["pending"].id

        response = await as_admin.delete(f"/api/admin/orders/{order_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": messages.ORDER_DELETED}
        assert await OrderRepository(session).get_by_id(order_id) is None

    async def test_delete_alias(self, as_admin, orders):
        response = await as_admin.delete(f"/api/admin/orders/{orders['paid'].id}/delete")

        assert response.status_code == 200

    async def test_delete_missing(self, as_admin):
        response = await as_admin.delete("/api/admin/orders/999")

        assert response.status_code == 404
        assert response.json()["error"] == messages.ORDER_NOT_FOUND


class TestGeocodeOrder:
    """Test POST /api/admin/orders/{id}/geocode."""

    async def test_stores_coordinates(self, as_admin, session, orders, geocoder_responses):
        responses, queries = geocoder_responses
        responses.append(
            httpx.Response(200, json=[{"lat": "54.6872", "lon": "25.2797", "display_name": "Gedimino pr., Vilnius"}])
        )
        order_id = orders["paid"].id

        response = await as_admin.post(f"/api/admin/orders/{order_id}/geocode")

        assert response.status_code == 200
        assert response.json()["data"] == {"lat": 54.6872, "lng": 25.2797, "display_name": "Gedimino pr., Vilnius"}
        assert queries == ["Gedimino pr., Vilnius"]
        order = await OrderRepository(session).get_by_id(order_id)
        assert order.address_latitude == pytest.approx(54.6872)
        assert order.address_longitude == pytest.approx(25.2797)

    async def test_address_not_found(self, as_admin, orders, geocoder_responses):
        geocoder_responses[0].append(httpx.Response(200, json=[]))

        response = await as_admin.post(f"/api/admin/orders/{orders['paid'].id}/geocode")

        assert response.status_code == 404
        assert response.json()["error"] == messages.GEOCODE_NOT_FOUND

    async def test_service_unavailable(self, as_admin, orders, geocoder_responses):
        geocoder_responses[0].append(httpx.Response(503, text="busy"))

        response = await as_admin.post(f"/api/admin/orders/{orders['paid'].id}/geocode")

        assert response.status_code == 502
        assert response.json()["error"] == messages.GEOCODE_FAILED

    async def test_order_without_address(self, as_admin, session, make_order, geocoder_responses):
        order = await OrderRepository(session).create(
            make_order(address_municipality=None, address_city=None, address_street=None)
        )

        response = await as_admin.post(f"/api/admin/orders/{order.id}/geocode")

        assert response.status_code == 400
        assert response.json()["error"] == messages.ADDRESS_MISSING
        assert geocoder_responses[1] == []
