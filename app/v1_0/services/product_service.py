from decimal import Decimal
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ProductNotFound
from app.core.logger import logger
from app.utils.tx import transactional
from app.v1_0.entities import (
    MessageDTO,
    ProductCreatedDTO,
    ProductDTO,
    ProductEnvelopeDTO,
    ProductListDTO,
)
from app.v1_0.repositories import ProductRepository
from app.v1_0.schemas import ProductCreate, ProductQuery


def _plain(value: Decimal) -> str:
    # 8.50 -> "8.5", 1000.00 -> "1000"
    return f"{Decimal(value).normalize():f}"


def default_description(payload: ProductCreate) -> str:
    return (
        f"A {payload.investment_type.upper()} investment product with "
        f"{_plain(payload.annual_yield)}% annual yield. "
        f"Minimum investment: ₹{_plain(payload.min_investment)}, "
        f"Tenure: {payload.tenure_months} months, "
        f"Risk level: {payload.risk_level}."
    )


class ProductService:
    def __init__(self, product_repository: ProductRepository) -> None:
        self.product_repository = product_repository

    async def _require(self, product_id: str, db: AsyncSession):
        """
        Ensure that a product exists or raise an HTTP 404 error.
        """
        p = await self.product_repository.get_product_by_id(product_id, db)
        if not p:
            raise ProductNotFound()
        return p

    async def list_products(self, query: ProductQuery, db: AsyncSession) -> ProductListDTO:
        """
        Public catalog listing with optional type/risk filters and sorting.
        """
        logger.debug("[ProductService] list %s", query.model_dump())
        rows = await self.product_repository.list_products(query, db)
        products = [ProductDTO.model_validate(p) for p in rows]
        return ProductListDTO(products=products, count=len(products))

    async def get(self, product_id: str, db: AsyncSession) -> ProductEnvelopeDTO:
        p = await self._require(product_id, db)
        return ProductEnvelopeDTO(product=ProductDTO.model_validate(p))

    async def create(self, payload: ProductCreate, db: AsyncSession) -> ProductCreatedDTO:
        """
        Create a catalog product; generates a description when none is given.

        Raises:
            HTTPException: 500 if creation fails unexpectedly.
        """
        logger.info("[ProductService] Creating product: %s", payload.name)
        description: Optional[str] = (payload.description or "").strip() or default_description(payload)

        try:
            async with transactional(db):
                p = await self.product_repository.create_product(payload, description, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[ProductService] Create failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create product")

        logger.info("[ProductService] Product created ID=%s", p.id)
        return ProductCreatedDTO(message="Product created successfully", product=ProductDTO.model_validate(p))

    async def delete(self, product_id: str, db: AsyncSession) -> MessageDTO:
        """
        Delete a product that no investment references.

        Raises:
            HTTPException:
                404 if the product does not exist.
                409 if investments reference it.
        """
        try:
            async with transactional(db):
                await self._require(product_id, db)
                if await self.product_repository.is_referenced(product_id, db):
                    raise HTTPException(
                        status_code=status.HTTP_409_CONFLICT,
                        detail="Product has investments and cannot be deleted",
                    )
                await self.product_repository.delete_product(product_id, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[ProductService] Delete failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to delete product")

        logger.info("[ProductService] Product deleted ID=%s", product_id)
        return MessageDTO(message="Product deleted successfully")
