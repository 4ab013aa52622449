from datetime import datetime
from decimal import Decimal
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import joinedload
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import Investment
from .base_repository import BaseRepository

class InvestmentRepository(BaseRepository[Investment]):
    def __init__(self) -> None:
        super().__init__(Investment)

    async def create_investment(
        self,
        *,
        user_id: str,
        product_id: str,
        amount: Decimal,
        expected_return: Decimal,
        maturity_date: datetime,
        invested_at: datetime,
        session: AsyncSession,
    ) -> Investment:
        """
        Persist an active investment and flush to assign PK.
        """
        entity = Investment(
            user_id=user_id,
            product_id=product_id,
            amount=amount,
            expected_return=expected_return,
            maturity_date=maturity_date,
            invested_at=invested_at,
            status="active",
        )
        await self.add(entity, session)
        return entity

    async def list_by_user_with_product(
        self,
        user_id: str,
        session: AsyncSession,
    ) -> List[Investment]:
        """
        All investments of a user joined with their (live) product, newest first.
        """
        stmt = (
            select(Investment)
            .options(joinedload(Investment.product, innerjoin=True))
            .where(Investment.user_id == user_id)
            .order_by(Investment.invested_at.desc(), Investment.id.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
