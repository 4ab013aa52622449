from datetime import datetime
from decimal import Decimal
from sqlalchemy import String, Numeric, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, new_uuid, utcnow
from .investment_product import InvestmentProduct

INVESTMENT_STATUSES = ("active", "matured", "cancelled")

class Investment(Base):
    __tablename__ = "investments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(
        ForeignKey("investment_products.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    invested_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    status: Mapped[str] = mapped_column(
        Enum(*INVESTMENT_STATUSES, name="investment_status"), nullable=False, default="active"
    )
    expected_return: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    maturity_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    product: Mapped[InvestmentProduct] = relationship(lazy="raise")
