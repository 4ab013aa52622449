from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import TransactionLog
from .base_repository import BaseRepository

class TransactionLogRepository(BaseRepository[TransactionLog]):
    def __init__(self) -> None:
        super().__init__(TransactionLog)

    async def list_for(
        self,
        session: AsyncSession,
        *,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        limit: int = 50,
    ) -> List[TransactionLog]:
        """
        Newest-first logs scoped by user_id, else by email, else unscoped.
        """
        stmt = select(TransactionLog)
        if user_id:
            stmt = stmt.where(TransactionLog.user_id == user_id)
        elif email:
            stmt = stmt.where(TransactionLog.email == email)
        stmt = stmt.order_by(TransactionLog.created_at.desc(), TransactionLog.id.desc()).limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())
