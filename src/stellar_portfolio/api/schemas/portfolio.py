"""Pydantic schemas for portfolio snapshot and performance endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from stellar_portfolio.domain.models import TimeWindow


class AssetBalanceResponse(BaseModel):
    """A valued asset balance. amount is an exact decimal string."""

    asset_code: str
    asset_issuer: Optional[str] = None
    amount: str
    value_usd: float


class SnapshotResponse(BaseModel):
    """Response schema for a portfolio snapshot."""

    snapshot_id: str
    user_id: str
    created_at: datetime
    asset_balances: list[AssetBalanceResponse]
    total_value_usd: Decimal


class SnapshotCreatedResponse(BaseModel):
    """Response schema for a manual snapshot."""

    success: bool = True
    snapshot: SnapshotResponse


class PortfolioHistoryResponse(BaseModel):
    """Paginated snapshot history."""

    snapshots: list[SnapshotResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class SnapshotTriggerResponse(BaseModel):
    """Outcome of a batch snapshot run."""

    message: str = "Snapshot creation triggered"
    success: int
    failed: int
    failures: dict[str, str] = {}


class TimeWindowPerformanceResponse(BaseModel):
    """Performance metrics for one window."""

    window: TimeWindow
    has_data: bool
    absolute_pnl: Optional[float] = None
    percentage_change: Optional[float] = None
    current_value_usd: float
    baseline_value_usd: Optional[float] = None
    baseline_date: Optional[datetime] = None


class PortfolioPerformanceResponse(BaseModel):
    """Performance across all windows."""

    user_id: str
    current_value_usd: float
    calculated_at: datetime
    windows: list[TimeWindowPerformanceResponse]
