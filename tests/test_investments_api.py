"""
Tests for the /api/investments endpoints.
"""
import uuid
from decimal import Decimal

from .conftest import bearer, make_product, signup


async def user_token(client) -> str:
    return (await signup(client)).json()["token"]


class TestCreateInvestment:

    async def test_requires_token(self, client) -> None:
        r = await client.post("/api/investments", json={"productId": str(uuid.uuid4()), "amount": 5000})
        assert r.status_code == 401
        assert r.json() == {"error": "Authorization required"}

    async def test_created(self, client, db) -> None:
        token = await user_token(client)
        p = await make_product(db, tenure_months=24, annual_yield=Decimal("8.50"))

        r = await client.post("/api/investments", json={"productId": p.id, "amount": 50000}, headers=bearer(token))

        assert r.status_code == 201
        inv = r.json()["investment"]
        assert r.json()["message"] == "Investment created successfully"
        assert inv["amount"] == 50000.0
        assert inv["expectedReturn"] == 8500.0
        assert inv["status"] == "active"
        assert inv["maturityDate"]
        assert inv["product"]["id"] == p.id
        assert inv["product"]["name"] == "Premium Bond Series A"

    async def test_below_global_floor(self, client, db) -> None:
        token = await user_token(client)
        p = await make_product(db, min_investment=Decimal("0"))
        r = await client.post("/api/investments", json={"productId": p.id, "amount": 999}, headers=bearer(token))
        assert r.status_code == 400
        assert r.json()["error"] == "Validation error"

    async def test_below_product_minimum(self, client, db) -> None:
        token = await user_token(client)
        p = await make_product(db, min_investment=Decimal("5000.00"))
        r = await client.post("/api/investments", json={"productId": p.id, "amount": 4000}, headers=bearer(token))
        assert r.status_code == 400
        assert r.json()["error"].startswith("Minimum investment amount is ₹")

    async def test_above_product_maximum(self, client, db) -> None:
        token = await user_token(client)
        p = await make_product(db, max_investment=Decimal("10000.00"))
        r = await client.post("/api/investments", json={"productId": p.id, "amount": 20000}, headers=bearer(token))
        assert r.status_code == 400
        assert r.json()["error"].startswith("Maximum investment amount is ₹")

    async def test_unknown_product(self, client) -> None:
        token = await user_token(client)
        r = await client.post(
            "/api/investments", json={"productId": str(uuid.uuid4()), "amount": 5000}, headers=bearer(token)
        )
        assert r.status_code == 404
        assert r.json() == {"error": "Product not found"}


class TestPortfolio:

    async def test_empty(self, client) -> None:
        token = await user_token(client)
        r = await client.get("/api/investments", headers=bearer(token))
        assert r.status_code == 200
        assert r.json() == {
            "investments": [],
            "portfolio": {
                "totalInvested": 0.0,
                "totalExpectedReturn": 0.0,
                "activeInvestmentsCount": 0,
                "averageYield": 0.0,
                "riskDistribution": {},
                "typeDistribution": {},
            },
        }

    async def test_summary(self, client, db) -> None:
        token = await user_token(client)
        low = await make_product(db, name="Safe FD", investment_type="fd", risk_level="low", annual_yield=Decimal("7.00"))
        high = await make_product(db, name="Growth MF", investment_type="mf", risk_level="high", annual_yield=Decimal("12.00"))

        for product_id, amount in ((low.id, 1000), (high.id, 2000)):
            r = await client.post(
                "/api/investments", json={"productId": product_id, "amount": amount}, headers=bearer(token)
            )
            assert r.status_code == 201

        r = await client.get("/api/investments", headers=bearer(token))
        body = r.json()
        assert len(body["investments"]) == 2
        assert body["investments"][0]["product"]["name"] == "Growth MF"
        summary = body["portfolio"]
        assert summary["totalInvested"] == 3000.0
        assert summary["activeInvestmentsCount"] == 2
        assert summary["averageYield"] == 9.5
        assert summary["riskDistribution"] == {"high": 2000.0, "low": 1000.0}
        assert summary["typeDistribution"] == {"mf": 2000.0, "fd": 1000.0}
        # 1000*7*24/1200 + 2000*12*24/1200
        assert summary["totalExpectedReturn"] == 620.0

    async def test_requires_token(self, client) -> None:
        r = await client.get("/api/investments")
        assert r.status_code == 401
