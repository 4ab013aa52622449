from dependency_injector import containers, providers
from app.v1_0.repositories import (
    UserRepository,
    ProductRepository,
    InvestmentRepository,
    PasswordResetRepository,
    TransactionLogRepository,
    )
from app.v1_0.services import (
    NotificationService,
    AuthService,
    PasswordResetService,
    ProductService,
    InvestmentService,
    PortfolioService,
    TransactionLogService,
    )

class APIContainer(containers.DeclarativeContainer):
    user_repository = providers.Singleton(UserRepository)
    product_repository = providers.Singleton(ProductRepository)
    investment_repository = providers.Singleton(InvestmentRepository)
    password_reset_repository = providers.Singleton(PasswordResetRepository)
    transaction_log_repository = providers.Singleton(TransactionLogRepository)

    notification_service = providers.Singleton(NotificationService)

    auth_service = providers.Singleton(
        AuthService,
        user_repository = user_repository,
        notification_service = notification_service
    )
    password_reset_service = providers.Singleton(
        PasswordResetService,
        user_repository = user_repository,
        password_reset_repository = password_reset_repository,
        notification_service = notification_service
    )
    product_service = providers.Singleton(
        ProductService,
        product_repository = product_repository
    )
    investment_service = providers.Singleton(
        InvestmentService,
        investment_repository = investment_repository,
        product_repository = product_repository
    )
    portfolio_service = providers.Singleton(
        PortfolioService,
        investment_repository = investment_repository
    )
    transaction_log_service = providers.Singleton(
        TransactionLogService,
        transaction_log_repository = transaction_log_repository
    )
