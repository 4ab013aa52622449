from collections import Counter
from typing import Iterable, List, Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import logger
from app.utils.tx import transactional
from app.v1_0.entities import (
    ErrorInsightsDTO,
    ErrorSummaryDTO,
    InsightDTO,
    LogPaginationDTO,
    LogsDTO,
    TransactionLogDTO,
)
from app.v1_0.models import TransactionLog
from app.v1_0.repositories import TransactionLogRepository

SUMMARY_WINDOW = 1000
RECENT_ERRORS = 10


def error_summary(logs: Iterable[TransactionLog]) -> ErrorSummaryDTO:
    """Counts over entries with status >= 400; input is newest first."""
    errors = [l for l in logs if l.status_code >= 400]
    return ErrorSummaryDTO(
        total_errors=len(errors),
        error_by_endpoint=dict(Counter(l.endpoint for l in errors)),
        error_by_status_code=dict(Counter(l.status_code for l in errors)),
        recent_errors=[TransactionLogDTO.model_validate(l) for l in errors[:RECENT_ERRORS]],
    )


def analyze_errors(summary: ErrorSummaryDTO) -> ErrorInsightsDTO:
    """Rule-based hints derived from an error summary."""
    out = ErrorInsightsDTO()
    if summary.total_errors <= 0:
        return out

    if summary.error_by_endpoint:
        # max() conserva el primero en caso de empate
        endpoint, count = max(summary.error_by_endpoint.items(), key=lambda kv: kv[1])
        out.critical_issues.append(InsightDTO(
            type="high_error_rate",
            endpoint=endpoint,
            count=count,
            message=f"High error rate detected on {endpoint} endpoint",
        ))
        out.recommendations.append(InsightDTO(
            type="investigate_endpoint",
            endpoint=endpoint,
            message=f"Investigate and fix issues with {endpoint} endpoint",
        ))

    by_code = summary.error_by_status_code
    if by_code.get(500):
        out.critical_issues.append(InsightDTO(
            type="server_errors",
            count=by_code[500],
            message="Server errors detected - check application logs",
        ))
        out.recommendations.append(InsightDTO(
            type="check_logs",
            message="Review server logs for 500 errors and fix underlying issues",
        ))

    if by_code.get(401) or by_code.get(403):
        out.patterns.append(InsightDTO(
            type="auth_issues",
            message="Authentication/authorization issues detected",
        ))
        out.recommendations.append(InsightDTO(
            type="review_auth",
            message="Review authentication flow and token validation",
        ))

    return out


class TransactionLogService:
    def __init__(self, transaction_log_repository: TransactionLogRepository) -> None:
        self.transaction_log_repository = transaction_log_repository

    async def record(
        self,
        db: AsyncSession,
        *,
        endpoint: str,
        http_method: str,
        status_code: int,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Persist one API call outcome. Never raises: a failed write is logged
        and dropped so the request it describes is unaffected.
        """
        try:
            async with transactional(db):
                await self.transaction_log_repository.add(
                    TransactionLog(
                        user_id=user_id,
                        email=email,
                        endpoint=endpoint[:255],
                        http_method=http_method.upper()[:10],
                        status_code=status_code,
                        error_message=error_message,
                    ),
                    db,
                )
        except Exception as e:
            logger.error("[TransactionLogService] record failed: %s", e)

    async def get_logs(
        self,
        db: AsyncSession,
        *,
        user_id: Optional[str],
        email: Optional[str],
        limit: int = 50,
        offset: int = 0,
    ) -> LogsDTO:
        """
        Caller's logs (newest first, paginated) with error summary and insights.
        """
        try:
            window: List[TransactionLog] = await self.transaction_log_repository.list_for(
                db, user_id=user_id, email=email, limit=SUMMARY_WINDOW
            )
        except Exception as e:
            logger.error("[TransactionLogService] get_logs failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch logs")

        page = window[offset:offset + limit]
        summary = error_summary(window)
        return LogsDTO(
            logs=[TransactionLogDTO.model_validate(l) for l in page],
            pagination=LogPaginationDTO(
                total=len(window),
                limit=limit,
                offset=offset,
                has_more=offset + limit < len(window),
            ),
            error_summary=summary,
            ai_insights=analyze_errors(summary),
        )
