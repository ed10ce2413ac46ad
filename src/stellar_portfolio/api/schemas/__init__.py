"""Pydantic schemas for API request/response."""

from stellar_portfolio.api.schemas.user import UserCreate, UserResponse, UserUpdate
from stellar_portfolio.api.schemas.account import (
    StellarAccountLink,
    StellarAccountLabelUpdate,
    StellarAccountResponse,
)
from stellar_portfolio.api.schemas.portfolio import (
    AssetBalanceResponse,
    SnapshotResponse,
    SnapshotCreatedResponse,
    PortfolioHistoryResponse,
    SnapshotTriggerResponse,
    TimeWindowPerformanceResponse,
    PortfolioPerformanceResponse,
)

__all__ = [
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    "StellarAccountLink",
    "StellarAccountLabelUpdate",
    "StellarAccountResponse",
    "AssetBalanceResponse",
    "SnapshotResponse",
    "SnapshotCreatedResponse",
    "PortfolioHistoryResponse",
    "SnapshotTriggerResponse",
    "TimeWindowPerformanceResponse",
    "PortfolioPerformanceResponse",
]
