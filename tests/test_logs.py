"""
Tests for transaction logging and error analysis.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from app.v1_0.entities import ErrorSummaryDTO
from app.v1_0.models import TransactionLog
from app.v1_0.repositories import TransactionLogRepository
from app.v1_0.services import TransactionLogService
from app.v1_0.services.transaction_log_service import analyze_errors, error_summary

from .conftest import bearer, signup

T0 = datetime(2024, 6, 1, tzinfo=timezone.utc)


def entry(i: int, endpoint: str, status_code: int) -> TransactionLog:
    return TransactionLog(
        id=i,
        endpoint=endpoint,
        http_method="GET",
        status_code=status_code,
        created_at=T0 - timedelta(minutes=i),
    )


class TestErrorSummary:

    def test_counts_only_errors(self) -> None:
        logs = [
            entry(1, "/api/auth/login", 401),
            entry(2, "/api/products", 200),
            entry(3, "/api/auth/login", 401),
            entry(4, "/api/investments", 500),
        ]
        summary = error_summary(logs)
        assert summary.total_errors == 3
        assert summary.error_by_endpoint == {"/api/auth/login": 2, "/api/investments": 1}
        assert summary.error_by_status_code == {401: 2, 500: 1}
        assert [e.id for e in summary.recent_errors] == [1, 3, 4]

    def test_recent_errors_capped_at_ten(self) -> None:
        logs = [entry(i, "/api/investments", 400) for i in range(15)]
        assert len(error_summary(logs).recent_errors) == 10


class TestAnalyzeErrors:

    def test_no_errors(self) -> None:
        insights = analyze_errors(ErrorSummaryDTO())
        assert insights.critical_issues == []
        assert insights.recommendations == []
        assert insights.patterns == []

    def test_rules(self) -> None:
        insights = analyze_errors(ErrorSummaryDTO(
            total_errors=4,
            error_by_endpoint={"/api/investments": 1, "/api/auth/login": 3},
            error_by_status_code={401: 3, 500: 1},
        ))
        critical = {i.type: i for i in insights.critical_issues}
        assert critical["high_error_rate"].endpoint == "/api/auth/login"
        assert critical["high_error_rate"].count == 3
        assert critical["server_errors"].count == 1
        assert [r.type for r in insights.recommendations] == ["investigate_endpoint", "check_logs", "review_auth"]
        assert [p.type for p in insights.patterns] == ["auth_issues"]

    def test_forbidden_counts_as_auth_issue(self) -> None:
        insights = analyze_errors(ErrorSummaryDTO(
            total_errors=1,
            error_by_endpoint={"/api/products": 1},
            error_by_status_code={403: 1},
        ))
        assert [p.type for p in insights.patterns] == ["auth_issues"]
        assert all(i.type != "server_errors" for i in insights.critical_issues)


class TestRecord:

    async def test_write_failure_is_swallowed(self, db) -> None:
        repo = AsyncMock()
        repo.add.side_effect = RuntimeError("db down")
        service = TransactionLogService(repo)
        await service.record(db, endpoint="/api/products", http_method="get", status_code=200)
        repo.add.assert_awaited_once()


class TestLogsEndpoint:

    async def test_requires_token(self, client) -> None:
        r = await client.get("/api/logs")
        assert r.status_code == 401

    async def test_caller_logs_and_insights(self, client) -> None:
        token = (await signup(client)).json()["token"]
        assert (await client.get("/api/auth/me", headers=bearer(token))).status_code == 200
        missing = await client.post(
            "/api/investments",
            json={"productId": "6b1d9f0e-0000-4000-8000-000000000000", "amount": 5000},
            headers=bearer(token),
        )
        assert missing.status_code == 404

        r = await client.get("/api/logs", headers=bearer(token))
        assert r.status_code == 200
        body = r.json()

        assert [l["endpoint"] for l in body["logs"]] == ["/api/investments", "/api/auth/me"]
        assert body["logs"][0]["httpMethod"] == "POST"
        assert body["logs"][0]["errorMessage"] == "Product not found"
        assert body["pagination"] == {"total": 2, "limit": 50, "offset": 0, "hasMore": False}
        assert body["errorSummary"]["totalErrors"] == 1
        assert body["errorSummary"]["errorByStatusCode"] == {"404": 1}
        assert body["aiInsights"]["criticalIssues"][0]["endpoint"] == "/api/investments"

    async def test_pagination(self, client) -> None:
        token = (await signup(client)).json()["token"]
        for _ in range(3):
            await client.get("/api/auth/me", headers=bearer(token))

        r = await client.get("/api/logs", params={"limit": 2, "offset": 1}, headers=bearer(token))
        body = r.json()
        assert len(body["logs"]) == 2
        assert body["pagination"] == {"total": 3, "limit": 2, "offset": 1, "hasMore": False}

    async def test_unhandled_error_is_recorded_with_message(self, app, client, session_factory) -> None:
        async def explode():
            raise RuntimeError("boom")

        app.add_api_route("/api/explode", explode, methods=["GET"])

        r = await client.get("/api/explode")
        assert r.status_code == 500
        assert r.json() == {"error": "Internal server error"}

        async with session_factory() as s:
            rows = await TransactionLogRepository().list_for(s, limit=10)
        assert [(l.endpoint, l.status_code, l.error_message) for l in rows] == [
            ("/api/explode", 500, "Internal server error"),
        ]
