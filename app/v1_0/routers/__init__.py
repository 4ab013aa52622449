from .auth_router import router as auth_router
from .product_router import router as product_router
from .investment_router import router as investment_router
from .logs_router import router as logs_router
from .health_router import router as health_router
defined_routers = [
    auth_router,
    product_router,
    investment_router,
    logs_router,
    health_router,
    ]
