from .user_DTO import (
    UserDTO,
    PasswordFeedbackDTO,
    AuthDTO,
    SignupDTO,
    MeDTO,
    ProfileDTO,
    MessageDTO,
)
from .product_DTO import ProductDTO, ProductListDTO, ProductEnvelopeDTO, ProductCreatedDTO
from .investment_DTO import (
    InvestmentProductRefDTO,
    InvestmentDTO,
    CreatedInvestmentDTO,
    InvestmentCreatedDTO,
    PortfolioSummaryDTO,
    PortfolioDTO,
)
from .transaction_log_DTO import (
    TransactionLogDTO,
    ErrorSummaryDTO,
    InsightDTO,
    ErrorInsightsDTO,
    LogPaginationDTO,
    LogsDTO,
)


__all__ = [
    "UserDTO", "PasswordFeedbackDTO", "AuthDTO", "SignupDTO", "MeDTO", "ProfileDTO", "MessageDTO",
    "ProductDTO", "ProductListDTO", "ProductEnvelopeDTO", "ProductCreatedDTO",
    "InvestmentProductRefDTO", "InvestmentDTO", "CreatedInvestmentDTO", "InvestmentCreatedDTO",
    "PortfolioSummaryDTO", "PortfolioDTO",
    "TransactionLogDTO", "ErrorSummaryDTO", "InsightDTO", "ErrorInsightsDTO",
    "LogPaginationDTO", "LogsDTO",
]
