"""Domain layer - pure business models with no external dependencies."""

from stellar_portfolio.domain.models import (
    TimeWindow,
    RawBalance,
    AssetBalance,
    PortfolioSnapshot,
    StellarAccount,
    User,
)

__all__ = [
    "TimeWindow",
    "RawBalance",
    "AssetBalance",
    "PortfolioSnapshot",
    "StellarAccount",
    "User",
]
