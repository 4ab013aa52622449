from .notification_service import NotificationService
from .auth_service import AuthService
from .password_reset_service import PasswordResetService
from .product_service import ProductService
from .investment_service import InvestmentService
from .portfolio_service import PortfolioService
from .transaction_log_service import TransactionLogService
__all__=[
    "NotificationService",
    "AuthService",
    "PasswordResetService",
    "ProductService",
    "InvestmentService",
    "PortfolioService",
    "TransactionLogService",
    ]
