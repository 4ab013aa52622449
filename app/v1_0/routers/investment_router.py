from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.security.deps import AuthContext, get_auth_context
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.schemas import InvestmentCreate
from app.v1_0.entities import InvestmentCreatedDTO, PortfolioDTO
from app.v1_0.services import InvestmentService, PortfolioService

router = APIRouter(prefix="/investments", tags=["Investments"])


@router.get(
    "",
    response_model=PortfolioDTO,
    summary="User investments with portfolio summary",
)
@inject
async def get_portfolio(
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: PortfolioService = Depends(
        Provide[ApplicationContainer.api_container.portfolio_service]
    ),
) -> PortfolioDTO:
    try:
        return await service.get_portfolio(db, user_id=auth_ctx.user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[InvestmentRouter] portfolio error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch investments")


@router.post(
    "",
    response_model=InvestmentCreatedDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create investment",
)
@inject
async def create_investment(
    request: InvestmentCreate,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: InvestmentService = Depends(
        Provide[ApplicationContainer.api_container.investment_service]
    ),
) -> InvestmentCreatedDTO:
    logger.info("[InvestmentRouter] create user=%s product=%s", auth_ctx.user_id, request.product_id)
    try:
        return await service.create(db, user_id=auth_ctx.user_id, payload=request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[InvestmentRouter] create error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create investment")
