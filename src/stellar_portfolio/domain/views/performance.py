"""View models for performance, history and batch outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from stellar_portfolio.domain.models import PortfolioSnapshot, TimeWindow


@dataclass
class PerformanceWindow:
    """PnL for one lookback window. Nullable fields are None when has_data is False."""

    window: TimeWindow
    has_data: bool
    current_value_usd: Decimal
    absolute_pnl: Optional[Decimal] = None
    percentage_change: Optional[Decimal] = None
    baseline_value_usd: Optional[Decimal] = None
    baseline_date: Optional[datetime] = None


@dataclass
class PerformanceReport:
    """Performance across all windows for one user."""

    user_id: str
    current_value_usd: Decimal
    calculated_at: datetime
    windows: list[PerformanceWindow] = field(default_factory=list)


@dataclass
class SnapshotPage:
    """One page of a user's snapshot history, newest first."""

    snapshots: list[PortfolioSnapshot]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.limit - 1) // self.limit


@dataclass
class SnapshotRunResult:
    """Outcome of a batch snapshot run."""

    success: int = 0
    failed: int = 0
    failures: dict[str, str] = field(default_factory=dict)
