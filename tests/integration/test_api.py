"""
Integration tests for the HTTP API.

Tests cover:
- Payment creation and validation errors
- Status lookup and listing
- Health probes
- Key material never leaving the process
"""

import pytest

from app.api.server import create_app
from app.models.payment import PaymentStatus
from jobs.scheduler import PollingScheduler


@pytest.fixture
def scheduler(ledger, mock_oracle, mock_forwarder):
    return PollingScheduler(ledger, mock_oracle, mock_forwarder, interval_ms=30000)


@pytest.fixture
async def client(aiohttp_client, ledger, scheduler):
    return await aiohttp_client(create_app(ledger, scheduler))


class TestCreatePayment:
    """POST /payment/create"""

    @pytest.mark.asyncio
    async def test_create(self, client, ledger):
        response = await client.post(
            "/payment/create", json={"amount": "0.05", "orderId": "order-123"}
        )

        assert response.status == 200
        body = await response.json()
        assert body["success"] is True
        assert set(body["data"]) == {"paymentId", "address", "amount"}
        assert body["data"]["amount"] == "0.05"
        assert body["data"]["address"].startswith("0x")
        assert ledger.get(body["data"]["paymentId"]).status == PaymentStatus.PENDING

    @pytest.mark.asyncio
    async def test_numeric_amount_accepted(self, client):
        response = await client.post(
            "/payment/create", json={"amount": 0.5, "orderId": 42}
        )

        assert response.status == 200
        assert (await response.json())["data"]["amount"] == "0.5"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"orderId": "order-1"},
            {"amount": "0.05"},
            {"amount": "", "orderId": "order-1"},
            {"amount": "0.05", "orderId": ""},
            {},
        ],
    )
    async def test_missing_fields(self, client, body):
        response = await client.post("/payment/create", json=body)

        assert response.status == 400
        assert await response.json() == {"error": "Amount and orderId are required"}

    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        response = await client.post("/payment/create", data="not json")

        assert response.status == 400
        assert await response.json() == {"error": "Amount and orderId are required"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("order_id", [{"a": 1}, [1], True])
    async def test_non_string_order_id(self, client, ledger, order_id):
        response = await client.post(
            "/payment/create", json={"amount": "0.05", "orderId": order_id}
        )

        assert response.status == 400
        assert await response.json() == {"error": "Amount and orderId are required"}
        assert ledger.list_all() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["abc", "-1", "NaN", "1e-30"])
    async def test_invalid_amount(self, client, ledger, amount):
        response = await client.post(
            "/payment/create", json={"amount": amount, "orderId": "order-1"}
        )

        assert response.status == 400
        assert await response.json() == {"error": "Invalid amount"}
        assert ledger.list_all() == []

    @pytest.mark.asyncio
    async def test_zero_amount_is_missing(self, client):
        """A zero amount is falsy and reported as missing."""
        response = await client.post(
            "/payment/create", json={"amount": 0, "orderId": "order-1"}
        )

        assert response.status == 400
        assert await response.json() == {"error": "Amount and orderId are required"}

    @pytest.mark.asyncio
    async def test_internal_error(self, client, ledger, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("no entropy")

        monkeypatch.setattr(ledger, "create", broken)

        response = await client.post(
            "/payment/create", json={"amount": "0.05", "orderId": "order-1"}
        )

        assert response.status == 500
        assert await response.json() == {"error": "Internal server error"}


class TestReadPayments:
    """GET /payment/{id}/status and GET /payments"""

    @pytest.mark.asyncio
    async def test_status(self, client, ledger):
        receipt = ledger.create("order-1", "0.05")

        response = await client.get(f"/payment/{receipt.payment_id}/status")

        assert response.status == 200
        data = (await response.json())["data"]
        assert data["id"] == receipt.payment_id
        assert data["orderId"] == "order-1"
        assert data["address"] == receipt.address
        assert data["amount"] == "0.05"
        assert data["status"] == "pending"
        assert data["completedAt"] is None

    @pytest.mark.asyncio
    async def test_status_after_completion(
        self, client, ledger, sample_transaction_hash
    ):
        payment_id = ledger.create("order-1", "0.05").payment_id
        ledger.transition(
            payment_id, PaymentStatus.COMPLETED, tx_hash=sample_transaction_hash
        )

        data = (await (await client.get(f"/payment/{payment_id}/status")).json())[
            "data"
        ]

        assert data["status"] == "completed"
        assert data["completedAt"] >= data["createdAt"]
        assert data["txHash"] == sample_transaction_hash

    @pytest.mark.asyncio
    async def test_status_not_found(self, client):
        response = await client.get("/payment/does-not-exist/status")

        assert response.status == 404
        assert await response.json() == {"error": "Payment not found"}

    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        response = await client.get("/payments")

        assert response.status == 200
        assert await response.json() == {"success": True, "data": []}

    @pytest.mark.asyncio
    async def test_list_in_creation_order(self, client, ledger):
        ids = [ledger.create(f"order-{i}", "1").payment_id for i in range(3)]

        data = (await (await client.get("/payments")).json())["data"]

        assert [item["id"] for item in data] == ids

    @pytest.mark.asyncio
    async def test_private_keys_never_returned(self, client, ledger):
        created = await client.post(
            "/payment/create", json={"amount": "0.05", "orderId": "order-1"}
        )
        payment_id = (await created.json())["data"]["paymentId"]
        secret = ledger.get(payment_id).private_key.reveal()

        responses = [
            await created.text(),
            await (await client.get(f"/payment/{payment_id}/status")).text(),
            await (await client.get("/payments")).text(),
        ]

        for text in responses:
            assert secret not in text
            assert secret[2:] not in text
            assert "privateKey" not in text


class TestHealth:
    """Health probes."""

    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get("/liveness")

        assert response.status == 200
        assert (await response.json())["alive"] is True

    @pytest.mark.asyncio
    async def test_readiness_before_start(self, client):
        response = await client.get("/readiness")

        assert response.status == 503

    @pytest.mark.asyncio
    async def test_health_running(self, client, scheduler, ledger):
        ledger.create("order-1", "0.05")
        scheduler.start()
        try:
            health = await client.get("/health")
            ready = await client.get("/readiness")
        finally:
            scheduler.stop()

        assert health.status == 200
        body = await health.json()
        assert body["status"] == "healthy"
        assert body["polling_interval_ms"] == 30000
        assert body["next_run_time"] is not None
        assert body["payments"] == {"pending": 1, "completed": 0, "failed": 0}
        assert ready.status == 200

    @pytest.mark.asyncio
    async def test_health_without_scheduler(self, aiohttp_client, ledger):
        client = await aiohttp_client(create_app(ledger))

        response = await client.get("/health")

        assert response.status == 503
