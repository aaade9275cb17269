"""Integration tests for Wallet, Payment and catalog API endpoints"""

from decimal import Decimal
import pytest
from httpx import AsyncClient


class TestWalletAPI:

    @pytest.mark.asyncio
    async def test_credit_then_debit(self, client: AsyncClient, seed):
        distributor_id = seed["distributor_id"]

        credit = await client.post(f"/wallets/{distributor_id}/credit", json={"amount": "250.00"})
        debit = await client.post(f"/wallets/{distributor_id}/debit", json={"amount": "100.00"})

        assert credit.status_code == 200
        assert Decimal(credit.json()["walletBalance"]) == Decimal("250.00")
        assert debit.status_code == 200
        assert Decimal(debit.json()["walletBalance"]) == Decimal("150.00")

    @pytest.mark.asyncio
    async def test_debit_more_than_balance(self, client: AsyncClient, seed):
        response = await client.post(f"/wallets/{seed['distributor_id']}/debit", json={"amount": "1.00"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INSUFFICIENT_FUNDS"

    @pytest.mark.asyncio
    async def test_unknown_distributor(self, client: AsyncClient):
        read = await client.get("/wallets/999")
        credit = await client.post("/wallets/999/credit", json={"amount": "1.00"})
        debit = await client.post("/wallets/999/debit", json={"amount": "1.00"})

        assert read.status_code == 404
        assert credit.status_code == 404
        assert debit.status_code == 404

    @pytest.mark.asyncio
    async def test_negative_amount_is_schema_error(self, client: AsyncClient, seed):
        response = await client.post(f"/wallets/{seed['distributor_id']}/credit", json={"amount": "-5"})

        assert response.status_code == 422


class TestPaymentAPI:

    @pytest.mark.asyncio
    async def test_record_payment_debits_wallet(self, client: AsyncClient, seed):
        distributor_id = seed["distributor_id"]
        await client.post(f"/wallets/{distributor_id}/credit", json={"amount": "500.00"})

        response = await client.post(
            "/payments",
            json={
                "distributorId": distributor_id,
                "paymentMethod": "Google Pay",
                "amount": "200.00",
                "receiptImageUrl": "https://cdn.example.com/r/9.jpg",
            },
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert data["paymentMethod"] == "Google Pay"
        assert Decimal(data["walletBalance"]) == Decimal("300.00")
        assert data["createdBy"]["role"] == "staff"

        listing = await client.get("/payments", params={"distributorId": distributor_id})
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_payment_rejected_when_balance_short(self, client: AsyncClient, seed):
        response = await client.post(
            "/payments",
            json={
                "distributorId": seed["distributor_id"],
                "paymentMethod": "Cash",
                "amount": "10.00",
                "receiptImageUrl": "https://cdn.example.com/r/10.jpg",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INSUFFICIENT_FUNDS"
        listing = await client.get("/payments")
        assert listing.json() == []


class TestCatalogAPI:

    @pytest.mark.asyncio
    async def test_create_product_derives_tub_cost(self, client: AsyncClient):
        response = await client.post(
            "/products",
            json={
                "company": "Aavin",
                "name": "Curd 500g",
                "quantity": "500",
                "unit": "gm",
                "costPerPacket": "15.00",
                "packetsPerTub": 12,
            },
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert Decimal(data["costPerTub"]) == Decimal("180.00")

        fetched = await client.get(f"/products/{data['productId']}")
        assert fetched.json()["name"] == "Curd 500g"

    @pytest.mark.asyncio
    async def test_unknown_product(self, client: AsyncClient):
        response = await client.get("/products/999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_distributor_unique_username(self, client: AsyncClient, seed):
        payload = {"distributorName": "Ravi", "companyName": "Other", "username": "ravi"}

        response = await client.post("/distributors", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_create_and_get_distributor(self, client: AsyncClient):
        created = await client.post(
            "/distributors",
            json={"distributorName": "Meena", "companyName": "Meena Milk", "username": "meena"},
        )
        fetched = await client.get(f"/distributors/{created.json()['distributorId']}")

        assert created.status_code == 201
        assert Decimal(fetched.json()["walletBalance"]) == Decimal("0.00")
        assert fetched.json()["status"] == "active"
