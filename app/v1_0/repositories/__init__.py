from .base_repository import BaseRepository
from .user_repository import UserRepository
from .product_repository import ProductRepository
from .investment_repository import InvestmentRepository
from .password_reset_repository import PasswordResetRepository
from .transaction_log_repository import TransactionLogRepository
__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProductRepository",
    "InvestmentRepository",
    "PasswordResetRepository",
    "TransactionLogRepository",
]
