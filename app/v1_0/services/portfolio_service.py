from decimal import Decimal
from typing import Dict, Iterable, List

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import logger
from app.v1_0.entities import InvestmentDTO, PortfolioDTO, PortfolioSummaryDTO
from app.v1_0.models import Investment
from app.v1_0.repositories import InvestmentRepository

ZERO = Decimal("0")


def summarize_portfolio(rows: Iterable[Investment]) -> PortfolioSummaryDTO:
    """
    Aggregate a user's investments (each with its product loaded).

    - total_invested and average_yield cover every status.
    - total_expected_return and the active count cover 'active' only.
    - Distributions sum amounts per risk level / type in first-seen order.
    """
    rows = list(rows)
    total_invested = ZERO
    total_expected = ZERO
    active = 0
    yields = ZERO
    risk: Dict[str, Decimal] = {}
    kinds: Dict[str, Decimal] = {}

    for inv in rows:
        amount = Decimal(inv.amount)
        total_invested += amount
        if inv.status == "active":
            active += 1
            total_expected += Decimal(inv.expected_return or 0)

        product = inv.product
        yields += Decimal(product.annual_yield)
        if product.risk_level:
            risk[product.risk_level] = risk.get(product.risk_level, ZERO) + amount
        if product.investment_type:
            kinds[product.investment_type] = kinds.get(product.investment_type, ZERO) + amount

    return PortfolioSummaryDTO(
        total_invested=total_invested,
        total_expected_return=total_expected,
        active_investments_count=active,
        average_yield=(yields / len(rows)) if rows else ZERO,
        risk_distribution=risk,
        type_distribution=kinds,
    )


class PortfolioService:
    def __init__(self, investment_repository: InvestmentRepository) -> None:
        self.investment_repository = investment_repository

    async def get_portfolio(self, db: AsyncSession, *, user_id: str) -> PortfolioDTO:
        """
        Investments of the user (newest first, live product join) plus summary.
        """
        logger.debug("[PortfolioService] portfolio user=%s", user_id)
        try:
            rows: List[Investment] = await self.investment_repository.list_by_user_with_product(user_id, db)
        except Exception as e:
            logger.error("[PortfolioService] load failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch investments")

        return PortfolioDTO(
            investments=[InvestmentDTO.model_validate(r) for r in rows],
            portfolio=summarize_portfolio(rows),
        )
