import asyncio
from typing import Any, Dict, Optional, Set

import httpx

from app.core.logger import logger
from app.core.settings import settings


class NotificationService:
    """Outbound mail through the Resend REST API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.url = settings.RESEND_API_URL
        self.transport = transport
        self.sender = settings.MAIL_FROM
        self._tasks: Set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return settings.MAIL_ENABLED

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {settings.RESEND_API_KEY.get_secret_value()}",
            "Content-Type": "application/json",
        }

    async def _send(self, to: str, subject: str, html: str) -> None:
        """
        POST one message to Resend.

        Raises:
            RuntimeError: On non-2xx responses.
            httpx.HTTPError: On transport failures.
        """
        payload: Dict[str, Any] = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        async with httpx.AsyncClient(timeout=15, transport=self.transport) as client:
            r = await client.post(self.url, headers=self._headers(), json=payload)
        if r.status_code >= 300:
            raise RuntimeError(f"resend_send_failed[{r.status_code}]: {r.text}")

    async def send_reset_code(self, email: str, code: str, user_name: Optional[str] = None) -> bool:
        """
        Deliver a password reset code.

        Returns:
            True when the provider accepted the message, or when mail is not
            configured (development: the code is logged instead). False on
            provider or transport failure.
        """
        if not self.enabled:
            logger.warning("[NotificationService] mail disabled, reset code for %s: %s", email, code)
            return True

        greeting = f"Hello, {user_name}!" if user_name else "Hello!"
        html = (
            f"<p>{greeting}</p>"
            "<p>We received a request to reset your password for your Grip Invest account. "
            "Use the verification code below to reset your password:</p>"
            f"<h2 style=\"letter-spacing:3px\">{code}</h2>"
            f"<p>This code expires in {settings.RESET_CODE_TTL_MIN} minutes. "
            "If you didn't request this, you can ignore this email.</p>"
        )
        try:
            await self._send(email, "Password Reset Code - Grip Invest", html)
            logger.info("[NotificationService] reset code sent to %s", email)
            return True
        except Exception as e:
            logger.error("[NotificationService] reset code to %s failed: %s", email, e)
            return False

    async def send_welcome(self, email: str, user_name: str) -> None:
        if not self.enabled:
            logger.debug("[NotificationService] mail disabled, welcome skipped for %s", email)
            return
        html = (
            f"<p>Welcome to Grip Invest, {user_name}!</p>"
            "<p>Your account is ready. Explore the product catalog and start building your portfolio.</p>"
            f"<p><a href=\"{settings.FRONTEND_URL}\">Open Grip Invest</a></p>"
        )
        try:
            await self._send(email, "Welcome to Grip Invest!", html)
            logger.info("[NotificationService] welcome sent to %s", email)
        except Exception as e:
            logger.warning("[NotificationService] welcome to %s failed: %s", email, e)

    def schedule_welcome(self, email: str, user_name: str) -> None:
        """Fire-and-forget welcome mail; never blocks nor fails the caller."""
        task = asyncio.create_task(self.send_welcome(email, user_name))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
