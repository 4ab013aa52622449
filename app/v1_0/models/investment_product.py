from datetime import datetime
from decimal import Decimal
from sqlalchemy import String, Text, Numeric, Integer, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, new_uuid, utcnow
from .users import RISK_LEVELS

INVESTMENT_TYPES = ("bond", "fd", "mf", "etf", "other")

class InvestmentProduct(Base):
    __tablename__ = "investment_products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    investment_type: Mapped[str] = mapped_column(
        Enum(*INVESTMENT_TYPES, name="investment_type"), nullable=False
    )
    tenure_months: Mapped[int] = mapped_column(Integer, nullable=False)
    annual_yield: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    risk_level: Mapped[str] = mapped_column(Enum(*RISK_LEVELS, name="risk_level"), nullable=False)
    min_investment: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("1000")
    )
    max_investment: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
