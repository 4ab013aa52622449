from datetime import datetime
from typing import List, Optional
from app.v1_0.schemas.base import CamelModel, Money


class ProductDTO(CamelModel):
    """Full catalog row."""
    id: str
    name: str
    investment_type: str
    tenure_months: int
    annual_yield: Money
    risk_level: str
    min_investment: Money
    max_investment: Optional[Money] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class ProductListDTO(CamelModel):
    products: List[ProductDTO]
    count: int


class ProductEnvelopeDTO(CamelModel):
    product: ProductDTO


class ProductCreatedDTO(CamelModel):
    message: str
    product: ProductDTO
