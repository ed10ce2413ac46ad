"""Domain models package."""

from stellar_portfolio.domain.models.enums import TimeWindow, PERFORMANCE_WINDOWS
from stellar_portfolio.domain.models.snapshot import (
    NATIVE_ASSET_CODE,
    RawBalance,
    AssetBalance,
    PortfolioSnapshot,
)
from stellar_portfolio.domain.models.account import StellarAccount
from stellar_portfolio.domain.models.user import User

__all__ = [
    "TimeWindow",
    "PERFORMANCE_WINDOWS",
    "NATIVE_ASSET_CODE",
    "RawBalance",
    "AssetBalance",
    "PortfolioSnapshot",
    "StellarAccount",
    "User",
]
