import asyncio
import secrets
from datetime import datetime, timedelta
from typing import Callable

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidOrExpiredCode, NotificationFailed, UserNotFound, WeakPassword
from app.core.logger import logger
from app.core.security.passwords import hash_password, score_password
from app.core.settings import settings
from app.utils.tx import transactional
from app.v1_0.entities import MessageDTO
from app.v1_0.models.base import utcnow
from app.v1_0.repositories import PasswordResetRepository, UserRepository
from app.v1_0.schemas import ResetPasswordIn
from .notification_service import NotificationService


def generate_reset_code() -> str:
    """Uniform 6-digit code in 100000..999999."""
    return str(100000 + secrets.randbelow(900000))


class PasswordResetService:
    def __init__(
        self,
        user_repository: UserRepository,
        password_reset_repository: PasswordResetRepository,
        notification_service: NotificationService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.user_repository = user_repository
        self.password_reset_repository = password_reset_repository
        self.notifications = notification_service
        self.clock = clock

    async def forgot_password(self, db: AsyncSession, *, email: str) -> MessageDTO:
        """
        Issue a reset code for an existing user and mail it.

        The token row is committed before dispatch; earlier live codes for the
        same email stay valid.

        Raises:
            HTTPException:
                404 UserNotFound.
                500 NotificationFailed when the mail provider rejects the send.
        """
        user = await self.user_repository.get_by_email(email, db)
        if not user:
            raise UserNotFound("User with this email does not exist")

        now = self.clock()
        code = generate_reset_code()
        try:
            async with transactional(db):
                await self.password_reset_repository.create_token(
                    email=email,
                    token=code,
                    expires_at=now + timedelta(minutes=settings.RESET_CODE_TTL_MIN),
                    created_at=now,
                    session=db,
                )
        except Exception as e:
            logger.error("[PasswordResetService] token insert failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to process password reset request")

        sent = await self.notifications.send_reset_code(email, code, user.first_name)
        if not sent:
            raise NotificationFailed()

        logger.info("[PasswordResetService] reset code issued for %s", email)
        return MessageDTO(message="Password reset code sent to your email")

    async def reset_password(self, db: AsyncSession, payload: ResetPasswordIn) -> MessageDTO:
        """
        Consume a live reset code and overwrite the password.

        The code is consumed with a conditional update so two concurrent
        resets with the same code cannot both succeed. Hash write and
        consumption share one transaction.

        Raises:
            HTTPException:
                400 WeakPassword.
                401 InvalidOrExpiredCode.
                404 UserNotFound.
        """
        strength = score_password(payload.new_password)
        if not strength.is_valid:
            raise WeakPassword(strength.feedback, strength.score)

        password_hash = await asyncio.to_thread(hash_password, payload.new_password)

        now = self.clock()
        try:
            async with transactional(db):
                token = await self.password_reset_repository.find_valid(
                    email=payload.email,
                    token=payload.code,
                    now=now,
                    session=db,
                )
                if not token:
                    raise InvalidOrExpiredCode()

                user = await self.user_repository.get_by_email(payload.email, db)
                if not user:
                    raise UserNotFound()

                if not await self.password_reset_repository.consume(token.id, now, db):
                    logger.warning("[PasswordResetService] code already consumed email=%s", payload.email)
                    raise InvalidOrExpiredCode()

                await self.user_repository.set_password(user, password_hash, now, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[PasswordResetService] reset failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to reset password")

        logger.info("[PasswordResetService] password reset for %s", payload.email)
        return MessageDTO(message="Password reset successfully")
