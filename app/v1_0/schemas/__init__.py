from .base import CamelModel, Money
from .auth_schema import (
    SignupIn,
    LoginIn,
    ForgotPasswordIn,
    ResetPasswordIn,
    ProfileUpdateIn,
    RiskAppetite,
    )
from .product_schema import ProductCreate, ProductQuery, InvestmentType, RiskLevel
from .investment_schema import InvestmentCreate
__all__ = [
    "CamelModel", "Money",
    "SignupIn", "LoginIn", "ForgotPasswordIn", "ResetPasswordIn", "ProfileUpdateIn", "RiskAppetite",
    "ProductCreate", "ProductQuery", "InvestmentType", "RiskLevel",
    "InvestmentCreate",
]
