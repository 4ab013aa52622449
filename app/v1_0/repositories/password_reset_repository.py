from datetime import datetime
from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import PasswordResetToken
from .base_repository import BaseRepository

class PasswordResetRepository(BaseRepository[PasswordResetToken]):
    def __init__(self) -> None:
        super().__init__(PasswordResetToken)

    async def create_token(
        self,
        *,
        email: str,
        token: str,
        expires_at: datetime,
        created_at: datetime,
        session: AsyncSession,
    ) -> PasswordResetToken:
        entity = PasswordResetToken(
            email=email,
            token=token,
            expires_at=expires_at,
            created_at=created_at,
            is_used="0",
        )
        await self.add(entity, session)
        return entity

    async def find_valid(
        self,
        *,
        email: str,
        token: str,
        now: datetime,
        session: AsyncSession,
    ) -> Optional[PasswordResetToken]:
        stmt = (
            select(PasswordResetToken)
            .where(
                PasswordResetToken.email == email,
                PasswordResetToken.token == token,
                PasswordResetToken.is_used == "0",
                PasswordResetToken.expires_at > now,
            )
            .order_by(PasswordResetToken.created_at.desc())
            .limit(1)
        )
        return await session.scalar(stmt)

    async def consume(
        self,
        token_id: str,
        now: datetime,
        session: AsyncSession,
    ) -> bool:
        """
        Compare-and-set: flips is_used '0' -> '1' only if still unused and live.
        Returns False when another request already consumed it.
        """
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.is_used == "0",
                PasswordResetToken.expires_at > now,
            )
            .values(is_used="1")
            .execution_options(synchronize_session=False)
        )
        res = await session.execute(stmt)
        return (res.rowcount or 0) == 1
