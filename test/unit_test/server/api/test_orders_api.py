"""Tests for the client order endpoints."""

from datetime import datetime, timedelta

from nt_savitarna.core.database.repositories import OrderRepository, ValuatorRepository
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.services import DEFAULT_VALUATOR


class TestListMyOrders:
    """Test GET /api/orders."""

    async def test_lists_own_orders_newest_first(self, as_client, session, make_order):
        repo = OrderRepository(session)
        now = datetime.now()
        older = await repo.create(make_order(contact_email="KLIENTAS@example.lt", created_at=now - timedelta(days=2)))
        newer = await repo.create(
            make_order(service_type="TYPE_1", is_enough_data_for_ai=True, status=None, rc_filename="ataskaita.pdf")
        )
        await repo.create(make_order(contact_email="kitas@example.lt"))

        response = await as_client.get("/api/orders")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [order["id"] for order in data] == [newer.id, older.id]

        first = data[0]
        assert first["display_status"] == "completed"
        assert first["status_label"] == "Atlikta"
        assert first["service_name"] == "Automatinis vertinimas"
        assert first["order_price"] == 8.0
        assert first["can_download"] is True
        assert first["report_url"].endswith("ataskaita.pdf")
        assert first["invoice_url"] is None
        assert first["valuator"]["name"] == DEFAULT_VALUATOR.name

        second = data[1]
        assert second["display_status"] == "paid"
        assert second["order_price"] == 30.0
        assert second["can_download"] is False

    async def test_assigned_valuator_contact(self, as_client, session, make_order, make_valuator):
        await ValuatorRepository(session).create(make_valuator(code="VAL001", first_name="Petras", last_name="Petraitis"))
        await OrderRepository(session).create(make_order(priskirta="VAL001"))

        response = await as_client.get("/api/orders")

        assert response.json()["data"][0]["valuator"]["name"] == "Petras Petraitis"

    async def test_empty(self, as_client):
        response = await as_client.get("/api/orders")

        assert response.json() == {"success": True, "data": [], "error": None}

    async def test_requires_login(self, client):
        response = await client.get("/api/orders")

        assert response.status_code == 401


class TestGetMyOrder:
    """Test GET /api/orders/{id}."""

    async def test_own_order(self, as_client, session, make_order):
        order = await OrderRepository(session).create(make_order(rc_saskaita="saskaita 1.pdf"))

        response = await as_client.get(f"/api/orders/{order.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token"] == order.token
        assert data["invoice_url"].endswith("saskaita%201.pdf")

    async def test_other_clients_order(self, as_client, session, make_order):
        order = await OrderRepository(session).create(make_order(contact_email="kitas@example.lt"))

        response = await as_client.get(f"/api/orders/{order.id}")

        assert response.status_code == 403
        assert response.json()["error"] == messages.ORDER_ACCESS_DENIED

    async def test_admin_may_open_any_order(self, as_admin, session, make_order):
        order = await OrderRepository(session).create(make_order(contact_email="kitas@example.lt"))

        response = await as_admin.get(f"/api/orders/{order.id}")

        assert response.status_code == 200

    async def test_not_found(self, as_client):
        response = await as_client.get("/api/orders/999")

        assert response.status_code == 404
        assert response.json()["error"] == messages.ORDER_NOT_FOUND

    async def test_invalid_id(self, as_client):
        response = await as_client.get("/api/orders/abc")

        assert response.status_code == 400
        assert response.json()["error"] == messages.INVALID_ORDER_ID
