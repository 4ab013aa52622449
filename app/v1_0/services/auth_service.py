import asyncio
from datetime import datetime
from typing import Callable

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DuplicateEmail, InvalidCredentials, UserNotFound, WeakPassword
from app.core.logger import logger
from app.core.security.jwt import create_access_token
from app.core.security.passwords import dummy_hash, hash_password, score_password, verify_password
from app.utils.tx import transactional
from app.v1_0.entities import (
    AuthDTO,
    PasswordFeedbackDTO,
    ProfileDTO,
    SignupDTO,
    UserDTO,
)
from app.v1_0.models import User
from app.v1_0.models.base import new_uuid, utcnow
from app.v1_0.repositories import UserRepository
from app.v1_0.schemas import LoginIn, ProfileUpdateIn, SignupIn
from .notification_service import NotificationService


class AuthService:
    """
    Credential lifecycle: signup, login, current user and profile edits.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        notification_service: NotificationService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialize the service.

        Args:
            user_repository: Repository for user persistence.
            notification_service: Mail sink used for the welcome message.
            clock: Source of "now"; injectable for tests.
        """
        self.user_repository = user_repository
        self.notifications = notification_service
        self.clock = clock

    @staticmethod
    def _issue(user: User) -> str:
        return create_access_token(user_id=user.id, email=user.email, role=user.role or "user")

    async def signup(self, db: AsyncSession, payload: SignupIn) -> SignupDTO:
        """
        Register a new user.

        Behavior:
        - Score the password; reject weak ones with their feedback.
        - Reject an email that is already stored (exact match).
        - Persist the bcrypt hash, issue a session token and schedule the
          welcome mail without waiting for it.

        Raises:
            HTTPException:
                400 WeakPassword.
                409 DuplicateEmail.
                500 on unexpected persistence failures.
        """
        strength = score_password(payload.password)
        if not strength.is_valid:
            logger.warning("[AuthService] weak password on signup email=%s score=%s", payload.email, strength.score)
            raise WeakPassword(strength.feedback, strength.score)

        # bcrypt fuera del event loop
        password_hash = await asyncio.to_thread(hash_password, payload.password)

        try:
            async with transactional(db):
                if await self.user_repository.get_by_email(payload.email, db):
                    raise DuplicateEmail()
                user = await self.user_repository.create_user(
                    user_id=new_uuid(),
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email=payload.email,
                    password_hash=password_hash,
                    risk_appetite=payload.risk_appetite,
                    session=db,
                )
        except HTTPException:
            raise
        except IntegrityError:
            # carrera contra otro signup con el mismo email
            logger.warning("[AuthService] duplicate email on insert: %s", payload.email)
            raise DuplicateEmail()
        except Exception as e:
            logger.error("[AuthService] signup failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create user")

        logger.info("[AuthService] user created id=%s", user.id)
        token = self._issue(user)
        self.notifications.schedule_welcome(user.email, user.first_name)

        return SignupDTO(
            message="User created successfully",
            token=token,
            user=UserDTO.model_validate(user),
            password_feedback=PasswordFeedbackDTO(score=strength.score, feedback=strength.feedback),
        )

    async def login(self, db: AsyncSession, payload: LoginIn) -> AuthDTO:
        """
        Authenticate by email and password.

        Raises:
            HTTPException: 401 InvalidCredentials for an unknown email or a
                wrong password alike.
        """
        user = await self.user_repository.get_by_email(payload.email, db)
        hashed = user.password_hash if user else await asyncio.to_thread(dummy_hash)
        ok = await asyncio.to_thread(verify_password, payload.password, hashed)
        if not user or not ok:
            logger.warning("[AuthService] login rejected email=%s", payload.email)
            raise InvalidCredentials()

        logger.info("[AuthService] login ok id=%s", user.id)
        return AuthDTO(
            message="Login successful",
            token=self._issue(user),
            user=UserDTO.model_validate(user),
        )

    async def me(self, db: AsyncSession, *, user_id: str) -> UserDTO:
        """
        Resolve the public view of the session owner.

        Raises:
            HTTPException: 404 if the user no longer exists.
        """
        logger.debug("[AuthService] me id=%s", user_id)
        user = await self.user_repository.get_by_id(user_id, db)
        if not user:
            raise UserNotFound()
        return UserDTO.model_validate(user)

    async def update_profile(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        payload: ProfileUpdateIn,
    ) -> ProfileDTO:
        data = payload.model_dump(exclude_unset=True)
        data["first_name"] = payload.first_name.strip()
        if data.get("risk_appetite") is None:
            data.pop("risk_appetite", None)

        try:
            async with transactional(db):
                user = await self.user_repository.get_by_id(user_id, db)
                if not user:
                    raise UserNotFound()
                await self.user_repository.update_profile(user, data, self.clock(), db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[AuthService] update_profile failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to update profile")

        logger.info("[AuthService] profile updated id=%s", user_id)
        return ProfileDTO(message="Profile updated successfully", user=UserDTO.model_validate(user))
