"""Portfolio snapshot domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

NATIVE_ASSET_CODE = "XLM"


@dataclass(frozen=True)
class RawBalance:
    """
    Balance of one asset as reported by the ledger network.

    Native lumens have asset_code "XLM" and no issuer.
    """

    asset_code: str
    amount: Decimal
    asset_issuer: Optional[str] = None

    @property
    def asset_key(self) -> tuple[str, Optional[str]]:
        """Identity of the asset regardless of amount."""
        return (self.asset_code, self.asset_issuer)

    @property
    def label(self) -> str:
        """Human readable asset label (CODE or CODE:ISSUER)."""
        if self.asset_issuer:
            return f"{self.asset_code}:{self.asset_issuer}"
        return self.asset_code


@dataclass(frozen=True)
class AssetBalance:
    """Valued asset balance attached to a snapshot."""

    asset_code: str
    asset_issuer: Optional[str]
    amount: Decimal
    value_usd: Decimal


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Point-in-time valuation of a user's holdings.

    Immutable once built. total_value_usd is the rounded sum of the
    balance values, computed once by the snapshot service.
    """

    snapshot_id: str
    user_id: str
    created_at: datetime
    total_value_usd: Decimal
    asset_balances: tuple[AssetBalance, ...] = field(default_factory=tuple)
