from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.storage.database.db_connector import get_db
from app.core.settings import settings
from app.core.logger import logger

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness and database check")
async def health(db: AsyncSession = Depends(get_db)):
    ts = datetime.now(timezone.utc).isoformat()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("[Health] database check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": ts,
                "services": {"database": "disconnected", "api": "running"},
                "error": "Database connection failed",
            },
        )
    return {
        "status": "healthy",
        "timestamp": ts,
        "services": {"database": "connected", "api": "running"},
        "version": settings.APP_VERSION,
    }
