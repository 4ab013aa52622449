from decimal import Decimal
from uuid import UUID
from pydantic import Field, field_validator
from app.core.settings import settings
from .base import CamelModel


class InvestmentCreate(CamelModel):
    """Create schema for an investment."""
    product_id: UUID = Field(..., description="Investment product ID")
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Amount to invest")

    model_config = {
        "json_schema_extra": {
            "example": {"productId": "0b5c1a8e-3c1f-4c61-9d0e-5a3f2f7f9b11", "amount": 50000}
        }
    }

    @field_validator("amount")
    @classmethod
    def _floor(cls, v: Decimal) -> Decimal:
        floor = Decimal(str(settings.MIN_INVESTMENT_FLOOR))
        if v < floor:
            raise ValueError(f"Minimum investment is ₹{floor:.0f}")
        return v
