import calendar
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AboveMaximum, BelowMinimum, ProductNotFound
from app.core.logger import logger
from app.utils.tx import transactional
from app.v1_0.entities import CreatedInvestmentDTO, InvestmentCreatedDTO, ProductDTO
from app.v1_0.models.base import utcnow
from app.v1_0.repositories import InvestmentRepository, ProductRepository
from app.v1_0.schemas import InvestmentCreate

CENT = Decimal("0.01")


def expected_return(amount: Decimal, annual_yield: Decimal, tenure_months: int) -> Decimal:
    """
    Simple (non-compounding) interest over the tenure:
    amount * annual_yield * tenure_months / 1200, rounded half-up to cents.
    """
    raw = Decimal(amount) * Decimal(annual_yield) * Decimal(tenure_months) / Decimal(1200)
    return raw.quantize(CENT, rounding=ROUND_HALF_UP)


def add_months(start: datetime, months: int) -> datetime:
    """
    Calendar month addition; the day is clamped to the last day of the
    target month (Jan 31 + 1 -> Feb 28/29). Time of day is kept.
    """
    idx = start.month - 1 + months
    y, m = start.year + idx // 12, idx % 12 + 1
    last = calendar.monthrange(y, m)[1]
    return start.replace(year=y, month=m, day=min(start.day, last))


class InvestmentService:
    def __init__(
        self,
        investment_repository: InvestmentRepository,
        product_repository: ProductRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.investment_repository = investment_repository
        self.product_repository = product_repository
        self.clock = clock

    async def create(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        payload: InvestmentCreate,
    ) -> InvestmentCreatedDTO:
        """
        Place an investment against a catalog product.

        Operations:
        - Load the product (row-locked where supported).
        - Check amount against the product's min and optional max.
        - Compute expected return and maturity date.
        - Persist with status 'active'.

        Returns:
            InvestmentCreatedDTO carrying the product as read at creation.

        Raises:
            HTTPException:
                404 ProductNotFound.
                400 BelowMinimum / AboveMaximum.
                500 on unexpected persistence failures.
        """
        product_id = str(payload.product_id)
        amount = payload.amount
        logger.info("[InvestmentService] create user=%s product=%s amount=%s", user_id, product_id, amount)

        try:
            async with transactional(db):
                product = await self.product_repository.get_product_by_id(product_id, db, for_update=True)
                if not product:
                    raise ProductNotFound()

                if amount < product.min_investment:
                    raise BelowMinimum(product.min_investment)
                if product.max_investment is not None and amount > product.max_investment:
                    raise AboveMaximum(product.max_investment)

                now = self.clock()
                inv = await self.investment_repository.create_investment(
                    user_id=user_id,
                    product_id=product_id,
                    amount=amount,
                    expected_return=expected_return(amount, product.annual_yield, product.tenure_months),
                    maturity_date=add_months(now, product.tenure_months),
                    invested_at=now,
                    session=db,
                )
                snapshot = ProductDTO.model_validate(product)
        except HTTPException as e:
            if e.status_code < 500:
                logger.warning("[InvestmentService] rejected: %s", e.detail)
            raise
        except Exception as e:
            logger.error("[InvestmentService] create failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create investment")

        logger.info("[InvestmentService] investment created id=%s", inv.id)
        return InvestmentCreatedDTO(
            message="Investment created successfully",
            investment=CreatedInvestmentDTO(
                id=inv.id,
                amount=inv.amount,
                invested_at=inv.invested_at,
                status=inv.status,
                expected_return=inv.expected_return,
                maturity_date=inv.maturity_date,
                product=snapshot,
            ),
        )
