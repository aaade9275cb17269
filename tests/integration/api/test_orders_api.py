"""Integration tests for Order and Bill API endpoints"""

from datetime import date, timedelta
from decimal import Decimal
import pytest
from httpx import AsyncClient


async def place_order(client: AsyncClient, seed, quantity="2"):
    payload = {
        "distributorId": seed["distributor_id"],
        "orderDate": seed["tomorrow"].isoformat(),
        "items": [{"productId": seed["tub_product_id"], "quantity": quantity, "unit": "tub"}],
        "customerName": "Ravi Dairy Agency",
    }
    response = await client.post("/orders", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestOrderAPI:
    """Integration test suite for Order API endpoints"""

    @pytest.mark.asyncio
    async def test_place_order(self, client: AsyncClient, seed):
        data = await place_order(client, seed)

        assert data["status"] == "pending"
        assert data["locked"] is False
        assert data["placedBy"] == {"kind": "staff", "id": 7, "username": None, "name": None}
        assert data["items"][0]["productId"] == seed["tub_product_id"]

    @pytest.mark.asyncio
    async def test_place_order_for_today_rejected(self, client: AsyncClient, seed):
        payload = {
            "distributorId": seed["distributor_id"],
            "orderDate": date.today().isoformat(),
            "items": [{"productId": seed["tub_product_id"], "quantity": "1", "unit": "tub"}],
        }

        response = await client.post("/orders", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_place_order_unknown_product(self, client: AsyncClient, seed):
        payload = {
            "distributorId": seed["distributor_id"],
            "orderDate": seed["tomorrow"].isoformat(),
            "items": [{"productId": 999, "quantity": "1", "unit": "tub"}],
        }

        response = await client.post("/orders", json=payload)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Invalid productId at index 0"

    @pytest.mark.asyncio
    async def test_zero_quantity_is_schema_error(self, client: AsyncClient, seed):
        payload = {
            "distributorId": seed["distributor_id"],
            "orderDate": seed["tomorrow"].isoformat(),
            "items": [{"productId": seed["tub_product_id"], "quantity": "0"}],
        }

        response = await client.post("/orders", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_quantity_below_storage_precision_is_schema_error(self, client: AsyncClient, seed):
        payload = {
            "distributorId": seed["distributor_id"],
            "orderDate": seed["tomorrow"].isoformat(),
            "items": [{"productId": seed["tub_product_id"], "quantity": "0.001"}],
        }

        response = await client.post("/orders", json=payload)
        listing = await client.get("/orders")

        assert response.status_code == 422
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_missing_actor_headers_unauthorized(self, client: AsyncClient):
        request = client.build_request("GET", "/orders")
        del request.headers["X-Actor-Role"]
        del request.headers["X-Actor-Id"]

        response = await client.send(request)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_distributor_actor_forbidden(self, client: AsyncClient):
        response = await client.get(
            "/orders", headers={"X-Actor-Role": "distributor", "X-Actor-Id": "5"}
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_deliver_settles_and_credits_wallet(self, client: AsyncClient, seed):
        order = await place_order(client, seed)

        response = await client.post(
            f"/orders/{order['orderId']}/deliver",
            json={
                "damagedProducts": [{"productId": seed["packet_product_id"], "damagedQuantity": 1}],
                "updatedBy": {"role": "staff", "id": 7, "name": "Anil"},
            },
        )

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["orderId"] == order["orderId"]
        assert Decimal(data["originalBillAmount"]) == Decimal("200.00")
        assert Decimal(data["totalDamagedCost"]) == Decimal("20.00")
        assert Decimal(data["finalBillAmount"]) == Decimal("180.00")
        assert Decimal(data["creditedAmount"]) == Decimal("180.00")
        assert Decimal(data["walletBalance"]) == Decimal("180.00")
        assert data["updatedBy"] == {"role": "staff", "id": 7, "name": "Anil"}
        assert data["damagedProducts"][0]["unit"] == "packets"

        wallet = await client.get(f"/wallets/{seed['distributor_id']}")
        assert Decimal(wallet.json()["walletBalance"]) == Decimal("180.00")

    @pytest.mark.asyncio
    async def test_deliver_rejects_distributor_as_updater(self, client: AsyncClient, seed):
        order = await place_order(client, seed)

        response = await client.post(
            f"/orders/{order['orderId']}/deliver",
            json={"updatedBy": {"role": "distributor", "id": seed["distributor_id"], "name": "Ravi"}},
        )
        wallet = await client.get(f"/wallets/{seed['distributor_id']}")

        assert response.status_code == 422
        assert Decimal(wallet.json()["walletBalance"]) == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_deliver_twice_reports_already_delivered(self, client: AsyncClient, seed):
        order = await place_order(client, seed)

        first = await client.post(f"/orders/{order['orderId']}/deliver")
        second = await client.post(f"/orders/{order['orderId']}/deliver", json={})

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["error"]["code"] == "ALREADY_SETTLED"

        wallet = await client.get(f"/wallets/{seed['distributor_id']}")
        assert Decimal(wallet.json()["walletBalance"]) == Decimal("200.00")

    @pytest.mark.asyncio
    async def test_deliver_unknown_order(self, client: AsyncClient):
        response = await client.post("/orders/9999/deliver", json={})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_and_delete_locked_order_forbidden(self, client: AsyncClient, seed):
        order = await place_order(client, seed)
        await client.post(f"/orders/{order['orderId']}/deliver", json={})

        update = await client.put(
            f"/orders/{order['orderId']}",
            json={"items": [{"productId": seed["tub_product_id"], "quantity": "5", "unit": "tub"}]},
        )
        delete = await client.delete(f"/orders/{order['orderId']}")

        assert update.status_code == 403
        assert update.json()["error"]["code"] == "ORDER_LOCKED"
        assert delete.status_code == 403

    @pytest.mark.asyncio
    async def test_update_pending_order(self, client: AsyncClient, seed):
        order = await place_order(client, seed)
        new_date = (seed["tomorrow"] + timedelta(days=1)).isoformat()

        response = await client.put(
            f"/orders/{order['orderId']}",
            json={
                "orderDate": new_date,
                "items": [{"productId": seed["packet_product_id"], "quantity": "1", "unit": "tub"}],
            },
        )

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["orderDate"] == new_date
        assert data["items"][0]["productId"] == seed["packet_product_id"]
        assert data["updatedBy"]["role"] == "staff"

    @pytest.mark.asyncio
    async def test_delete_pending_order(self, client: AsyncClient, seed):
        order = await place_order(client, seed)

        response = await client.delete(f"/orders/{order['orderId']}")
        listing = await client.get("/orders")

        assert response.status_code == 200
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_listings(self, client: AsyncClient, seed):
        order = await place_order(client, seed)

        everything = await client.get("/orders")
        mine = await client.get("/orders/mine")
        theirs = await client.get("/orders/mine", headers={"X-Actor-Role": "admin", "X-Actor-Id": "1"})
        by_distributor = await client.get(f"/orders/distributor/{seed['distributor_id']}")
        tomorrow = await client.get(f"/orders/distributor/{seed['distributor_id']}/tomorrow")

        assert [o["orderId"] for o in everything.json()] == [order["orderId"]]
        assert [o["orderId"] for o in mine.json()] == [order["orderId"]]
        assert theirs.json() == []
        assert [o["orderId"] for o in by_distributor.json()] == [order["orderId"]]
        assert [o["orderId"] for o in tomorrow.json()] == [order["orderId"]]


class TestBillAPI:

    @pytest.mark.asyncio
    async def test_create_bill_recomputes_draft(self, client: AsyncClient, seed):
        order = await place_order(client, seed)

        response = await client.post("/bills/create", json={"orderId": order["orderId"]})

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["created"] is False
        assert Decimal(data["bill"]["totalAmount"]) == Decimal("200.00")
        assert data["bill"]["locked"] is False

    @pytest.mark.asyncio
    async def test_create_bill_for_delivered_order_forbidden(self, client: AsyncClient, seed):
        order = await place_order(client, seed)
        await client.post(f"/orders/{order['orderId']}/deliver", json={})

        response = await client.post("/bills/create", json={"orderId": order["orderId"]})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_list_bills(self, client: AsyncClient, seed):
        order = await place_order(client, seed)
        await client.post(f"/orders/{order['orderId']}/deliver", json={})

        all_bills = await client.get("/bills")
        distributor_bills = await client.get(f"/bills/distributor/{seed['distributor_id']}")
        other_bills = await client.get("/bills/distributor/999")

        assert len(all_bills.json()) == 1
        bill = distributor_bills.json()[0]
        assert bill["orderId"] == order["orderId"]
        assert bill["status"] == "completed"
        assert bill["locked"] is True
        assert other_bills.json() == []
