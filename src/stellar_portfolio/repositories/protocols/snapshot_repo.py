"""Snapshot repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from stellar_portfolio.domain.models import PortfolioSnapshot


class SnapshotRepository(Protocol):
    """Append-only store of portfolio snapshots, scoped by user."""

    def append(self, snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
        """Persist a new snapshot. Snapshots are never updated."""
        ...

    def latest(self, user_id: str) -> Optional[PortfolioSnapshot]:
        """Most recent snapshot for the user."""
        ...

    def latest_before(self, user_id: str, cutoff: datetime) -> Optional[PortfolioSnapshot]:
        """
        Latest snapshot with created_at <= cutoff.

        Ties on created_at resolve to the highest snapshot_id.
        """
        ...

    def page(self, user_id: str, page: int, limit: int) -> tuple[list[PortfolioSnapshot], int]:
        """Return (snapshots newest first, total count) for a 1-based page."""
        ...
