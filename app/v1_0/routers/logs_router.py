from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.security.deps import AuthContext, get_auth_context
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.entities import LogsDTO
from app.v1_0.services import TransactionLogService

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get(
    "",
    response_model=LogsDTO,
    summary="Caller's API call log with error analysis",
)
@inject
async def get_logs(
    limit: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: TransactionLogService = Depends(
        Provide[ApplicationContainer.api_container.transaction_log_service]
    ),
) -> LogsDTO:
    try:
        return await service.get_logs(
            db,
            user_id=auth_ctx.user_id,
            email=auth_ctx.email,
            limit=limit,
            offset=offset,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[LogsRouter] get error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
