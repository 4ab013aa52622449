from typing import Optional
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.security.deps import AuthContext, require_admin
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.schemas import ProductCreate, ProductQuery, InvestmentType, RiskLevel
from app.v1_0.schemas.product_schema import SortBy
from app.v1_0.entities import (
    ProductListDTO,
    ProductEnvelopeDTO,
    ProductCreatedDTO,
    MessageDTO,
)
from app.v1_0.services import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=ProductListDTO,
    summary="List investment products",
)
@inject
async def list_products(
    type: Optional[InvestmentType] = Query(None),
    risk_level: Optional[RiskLevel] = Query(None, alias="riskLevel"),
    sort_by: SortBy = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> ProductListDTO:
    query = ProductQuery(type=type, risk_level=risk_level, sort_by=sort_by, sort_order=sort_order)
    try:
        return await service.list_products(query, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ProductRouter] list error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch products")


@router.get(
    "/{product_id}",
    response_model=ProductEnvelopeDTO,
    summary="Get product by ID",
)
@inject
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> ProductEnvelopeDTO:
    logger.debug(f"[ProductRouter] get id={product_id}")
    try:
        return await service.get(str(product_id), db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ProductRouter] get error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch product")


@router.post(
    "",
    response_model=ProductCreatedDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create product (admin)",
)
@inject
async def create_product(
    request: ProductCreate,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_admin),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> ProductCreatedDTO:
    logger.info("[ProductRouter] create by=%s name=%s", auth_ctx.user_id, request.name)
    try:
        return await service.create(request, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ProductRouter] create error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create product")


@router.delete(
    "/{product_id}",
    response_model=MessageDTO,
    summary="Delete product (admin)",
)
@inject
async def delete_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_admin),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> MessageDTO:
    logger.info("[ProductRouter] delete by=%s id=%s", auth_ctx.user_id, product_id)
    try:
        return await service.delete(str(product_id), db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ProductRouter] delete error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete product")
