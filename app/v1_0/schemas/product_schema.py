from decimal import Decimal
from typing import Literal, Optional
from pydantic import Field, model_validator
from .base import CamelModel

InvestmentType = Literal["bond", "fd", "mf", "etf", "other"]
RiskLevel = Literal["low", "moderate", "high"]
SortBy = Literal["createdAt", "annualYield", "yield", "tenureMonths", "tenure", "minInvestment"]


class ProductCreate(CamelModel):
    """Create schema for an investment product."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    investment_type: InvestmentType
    tenure_months: int = Field(..., ge=1, description="Tenure must be at least 1 month")
    annual_yield: Decimal = Field(..., ge=0, max_digits=5, decimal_places=2)
    risk_level: RiskLevel
    min_investment: Decimal = Field(Decimal("1000"), ge=0, max_digits=12, decimal_places=2)
    max_investment: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Premium Bond Series A",
                "investmentType": "bond",
                "tenureMonths": 24,
                "annualYield": 8.5,
                "riskLevel": "low",
                "minInvestment": 1000,
                "maxInvestment": 1000000,
            }
        }
    }

    @model_validator(mode="after")
    def _bounds(self):
        if self.max_investment is not None and self.max_investment < self.min_investment:
            raise ValueError("maxInvestment must be greater than or equal to minInvestment")
        return self


class ProductQuery(CamelModel):
    type: Optional[InvestmentType] = None
    risk_level: Optional[RiskLevel] = None
    sort_by: SortBy = "createdAt"
    sort_order: Literal["asc", "desc"] = "desc"
