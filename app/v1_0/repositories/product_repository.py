from typing import Optional, List
from sqlalchemy import select, asc, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import InvestmentProduct, Investment
from app.v1_0.schemas import ProductCreate, ProductQuery
from .base_repository import BaseRepository

_SORT_COLUMNS = {
    "createdAt": InvestmentProduct.created_at,
    "annualYield": InvestmentProduct.annual_yield,
    "yield": InvestmentProduct.annual_yield,
    "tenureMonths": InvestmentProduct.tenure_months,
    "tenure": InvestmentProduct.tenure_months,
    "minInvestment": InvestmentProduct.min_investment,
}

class ProductRepository(BaseRepository[InvestmentProduct]):
    def __init__(self) -> None:
        super().__init__(InvestmentProduct)

    async def create_product(
        self,
        payload: ProductCreate,
        description: str,
        session: AsyncSession
    ) -> InvestmentProduct:
        entity = InvestmentProduct(
            name=payload.name,
            investment_type=payload.investment_type,
            tenure_months=payload.tenure_months,
            annual_yield=payload.annual_yield,
            risk_level=payload.risk_level,
            min_investment=payload.min_investment,
            max_investment=payload.max_investment,
            description=description,
        )
        await self.add(entity, session)
        return entity

    async def get_product_by_id(
        self,
        product_id: str,
        session: AsyncSession,
        *,
        for_update: bool = False,
    ) -> Optional[InvestmentProduct]:
        return await super().get_by_id(product_id, session, for_update=for_update)

    async def list_products(
        self,
        query: ProductQuery,
        session: AsyncSession,
    ) -> List[InvestmentProduct]:
        stmt = select(InvestmentProduct)
        if query.type:
            stmt = stmt.where(InvestmentProduct.investment_type == query.type)
        if query.risk_level:
            stmt = stmt.where(InvestmentProduct.risk_level == query.risk_level)

        col = _SORT_COLUMNS.get(query.sort_by, InvestmentProduct.created_at)
        direction = asc if query.sort_order == "asc" else desc
        stmt = stmt.order_by(direction(col), direction(InvestmentProduct.id))

        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def is_referenced(self, product_id: str, session: AsyncSession) -> bool:
        hit = await session.scalar(
            select(Investment.id).where(Investment.product_id == product_id).limit(1)
        )
        return hit is not None

    async def delete_product(
        self,
        product_id: str,
        session: AsyncSession
    ) -> bool:
        entity = await self.get_product_by_id(product_id, session)
        if not entity:
            return False
        await self.delete(entity, session)
        return True
