from datetime import datetime
from typing import Dict, List, Optional
from app.v1_0.schemas.base import CamelModel


class TransactionLogDTO(CamelModel):
    id: int
    user_id: Optional[str] = None
    email: Optional[str] = None
    endpoint: str
    http_method: str
    status_code: int
    error_message: Optional[str] = None
    created_at: datetime


class ErrorSummaryDTO(CamelModel):
    total_errors: int = 0
    error_by_endpoint: Dict[str, int] = {}
    error_by_status_code: Dict[int, int] = {}
    recent_errors: List[TransactionLogDTO] = []


class InsightDTO(CamelModel):
    type: str
    message: str
    endpoint: Optional[str] = None
    count: Optional[int] = None


class ErrorInsightsDTO(CamelModel):
    critical_issues: List[InsightDTO] = []
    recommendations: List[InsightDTO] = []
    patterns: List[InsightDTO] = []


class LogPaginationDTO(CamelModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class LogsDTO(CamelModel):
    logs: List[TransactionLogDTO]
    pagination: LogPaginationDTO
    error_summary: ErrorSummaryDTO
    ai_insights: ErrorInsightsDTO
