"""
Tests for the Resend-backed NotificationService, driven through
httpx.MockTransport.

A failed welcome mail is only logged. A failed reset-code mail is reported
back so the reset flow can surface it.
"""
import asyncio
import json
from typing import List

import httpx
import pytest
from pydantic import SecretStr

from app.core.errors import NotificationFailed
from app.core.settings import settings
from app.v1_0.repositories import PasswordResetRepository, UserRepository
from app.v1_0.schemas import SignupIn
from app.v1_0.services import AuthService, NotificationService, PasswordResetService

from .conftest import STRONG_PASSWORD, make_user


@pytest.fixture
def mail_enabled(monkeypatch) -> None:
    monkeypatch.setattr(settings, "RESEND_API_KEY", SecretStr("re_test_key"))


def replying(status_code: int, seen: List[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, json={"id": "msg_1"})

    return httpx.MockTransport(handler)


def unreachable() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


class TestSendResetCode:

    async def test_accepted(self, mail_enabled) -> None:
        seen: List[httpx.Request] = []
        service = NotificationService(transport=replying(200, seen))

        assert await service.send_reset_code("asha@example.com", "482913", "Asha") is True

        assert len(seen) == 1
        request = seen[0]
        assert str(request.url) == settings.RESEND_API_URL
        assert request.headers["authorization"] == "Bearer re_test_key"
        body = json.loads(request.content)
        assert body["to"] == ["asha@example.com"]
        assert body["from"] == settings.MAIL_FROM
        assert "482913" in body["html"]
        assert "Hello, Asha!" in body["html"]

    async def test_provider_rejection(self, mail_enabled) -> None:
        service = NotificationService(transport=replying(422, []))
        assert await service.send_reset_code("asha@example.com", "482913") is False

    async def test_transport_error(self, mail_enabled) -> None:
        service = NotificationService(transport=unreachable())
        assert await service.send_reset_code("asha@example.com", "482913") is False

    async def test_disabled_mail_reports_success_without_sending(self) -> None:
        seen: List[httpx.Request] = []
        service = NotificationService(transport=replying(200, seen))

        assert await service.send_reset_code("asha@example.com", "482913") is True
        assert seen == []


class TestWelcome:

    async def test_failure_is_swallowed(self, mail_enabled) -> None:
        service = NotificationService(transport=replying(500, []))
        assert await service.send_welcome("asha@example.com", "Asha") is None

    async def test_transport_error_is_swallowed(self, mail_enabled) -> None:
        service = NotificationService(transport=unreachable())
        assert await service.send_welcome("asha@example.com", "Asha") is None

    async def test_schedule_does_not_wait_for_delivery(self, mail_enabled) -> None:
        gate = asyncio.Event()
        seen: List[dict] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            await gate.wait()
            seen.append(json.loads(request.content))
            return httpx.Response(500)

        service = NotificationService(transport=httpx.MockTransport(handler))
        service.schedule_welcome("asha@example.com", "Asha")

        tasks = list(service._tasks)
        assert len(tasks) == 1
        assert not tasks[0].done()
        assert seen == []

        gate.set()
        await asyncio.gather(*tasks)
        assert seen[0]["to"] == ["asha@example.com"]
        assert seen[0]["subject"] == "Welcome to Grip Invest!"
        assert tasks[0].exception() is None


class TestFailureHandlingByFlow:

    async def test_signup_survives_welcome_failure(self, db, mail_enabled) -> None:
        notifications = NotificationService(transport=unreachable())
        service = AuthService(UserRepository(), notifications)

        out = await service.signup(db, SignupIn(
            first_name="Asha", email="asha@example.com", password=STRONG_PASSWORD,
        ))
        await asyncio.gather(*list(notifications._tasks))

        assert out.message == "User created successfully"
        assert out.token

    async def test_reset_code_failure_is_surfaced(self, db, mail_enabled) -> None:
        await make_user(db, email="ravi@example.com")
        service = PasswordResetService(
            UserRepository(),
            PasswordResetRepository(),
            NotificationService(transport=replying(503, [])),
        )

        with pytest.raises(NotificationFailed) as exc:
            await service.forgot_password(db, email="ravi@example.com")
        assert exc.value.status_code == 500
