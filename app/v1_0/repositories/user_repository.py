from datetime import datetime
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import User
from .base_repository import BaseRepository

class UserRepository(BaseRepository[User]):
    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, email: str, session: AsyncSession) -> User | None:
        # comparacion exacta, tal como se guardo
        return await session.scalar(
            select(User).where(User.email == email)
        )

    async def create_user(
        self,
        *,
        user_id: str,
        first_name: str,
        last_name: Optional[str],
        email: str,
        password_hash: str,
        risk_appetite: str,
        session: AsyncSession,
    ) -> User:
        u = User(
            id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            risk_appetite=risk_appetite,
        )
        await self.add(u, session)
        return u

    async def set_password(
        self,
        user: User,
        password_hash: str,
        now: datetime,
        session: AsyncSession,
    ) -> User:
        return await self.update_fields(
            user, {"password_hash": password_hash, "updated_at": now}, session
        )

    async def update_profile(
        self,
        user: User,
        data: dict,
        now: datetime,
        session: AsyncSession,
    ) -> User:
        return await self.update_fields(
            user,
            {**data, "updated_at": now},
            session,
            allow={"first_name", "last_name", "risk_appetite", "updated_at"},
        )
