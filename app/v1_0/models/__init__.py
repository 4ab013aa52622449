from .base import Base
from .users import User, RISK_LEVELS, USER_ROLES
from .investment_product import InvestmentProduct, INVESTMENT_TYPES
from .investment import Investment, INVESTMENT_STATUSES
from .password_reset_token import PasswordResetToken
from .transaction_log import TransactionLog
__all__ = [
    "Base",
    "User",
    "InvestmentProduct",
    "Investment",
    "PasswordResetToken",
    "TransactionLog",
    "RISK_LEVELS",
    "USER_ROLES",
    "INVESTMENT_TYPES",
    "INVESTMENT_STATUSES",
]
