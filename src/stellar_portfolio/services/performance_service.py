"""Performance service for rolling PnL over fixed windows."""

from datetime import datetime
from typing import Callable, Optional

from stellar_portfolio.core.exceptions import NoSnapshotDataError
from stellar_portfolio.core.money import percentage_change, round_usd
from stellar_portfolio.core.timezone import now_utc, to_utc
from stellar_portfolio.domain.models import PERFORMANCE_WINDOWS, PortfolioSnapshot, TimeWindow
from stellar_portfolio.domain.views import PerformanceReport, PerformanceWindow
from stellar_portfolio.repositories.protocols import SnapshotRepository


class PerformanceService:
    """
    Service for portfolio performance over 24h, 7d and 30d.

    The baseline for a window is the latest snapshot taken at or before
    now - window, never one taken after the window start. The current
    snapshot is never its own baseline.
    """

    def __init__(
        self,
        snapshot_repo: SnapshotRepository,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._snapshot_repo = snapshot_repo
        self._clock = clock

    def compute_performance(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> PerformanceReport:
        """
        Compute PnL and percentage change for every window.

        Raises NoSnapshotDataError if the user has no snapshot yet.
        """
        current = self._snapshot_repo.latest(user_id)
        if current is None:
            raise NoSnapshotDataError(user_id)

        calculated_at = to_utc(now) if now else self._clock()
        current_value = current.total_value_usd

        return PerformanceReport(
            user_id=user_id,
            current_value_usd=current_value,
            calculated_at=calculated_at,
            windows=[
                self._window_performance(user_id, window, current, calculated_at)
                for window in PERFORMANCE_WINDOWS
            ],
        )

    def _window_performance(
        self,
        user_id: str,
        window: TimeWindow,
        current: PortfolioSnapshot,
        now: datetime,
    ) -> PerformanceWindow:
        current_value = current.total_value_usd
        baseline = self._snapshot_repo.latest_before(user_id, now - window.offset)
        if baseline is None or baseline.snapshot_id == current.snapshot_id:
            return PerformanceWindow(
                window=window,
                has_data=False,
                current_value_usd=current_value,
            )

        absolute_pnl = round_usd(current_value - baseline.total_value_usd)
        return PerformanceWindow(
            window=window,
            has_data=True,
            current_value_usd=current_value,
            absolute_pnl=absolute_pnl,
            percentage_change=percentage_change(absolute_pnl, baseline.total_value_usd),
            baseline_value_usd=baseline.total_value_usd,
            baseline_date=baseline.created_at,
        )
