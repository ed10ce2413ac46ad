"""API routers package."""

from stellar_portfolio.api.routers.users import router as users_router
from stellar_portfolio.api.routers.accounts import router as accounts_router
from stellar_portfolio.api.routers.portfolio import router as portfolio_router

__all__ = [
    "users_router",
    "accounts_router",
    "portfolio_router",
]
