from datetime import datetime
from typing import Dict, List, Optional
from app.v1_0.schemas.base import CamelModel, Money
from .product_DTO import ProductDTO


class InvestmentProductRefDTO(CamelModel):
    """Product columns joined into a portfolio row (live data)."""
    id: str
    name: str
    investment_type: str
    annual_yield: Money
    risk_level: str
    tenure_months: int


class InvestmentDTO(CamelModel):
    id: str
    amount: Money
    invested_at: datetime
    status: str
    expected_return: Optional[Money] = None
    maturity_date: Optional[datetime] = None
    product: InvestmentProductRefDTO


class CreatedInvestmentDTO(CamelModel):
    """Creation response: product snapshot as read when the investment was placed."""
    id: str
    amount: Money
    invested_at: datetime
    status: str
    expected_return: Money
    maturity_date: datetime
    product: ProductDTO


class InvestmentCreatedDTO(CamelModel):
    message: str
    investment: CreatedInvestmentDTO


class PortfolioSummaryDTO(CamelModel):
    total_invested: Money
    total_expected_return: Money
    active_investments_count: int
    average_yield: Money
    risk_distribution: Dict[str, Money]
    type_distribution: Dict[str, Money]


class PortfolioDTO(CamelModel):
    investments: List[InvestmentDTO]
    portfolio: PortfolioSummaryDTO
