"""Service layer - business logic orchestration."""

from stellar_portfolio.services.snapshot_service import SnapshotService, merge_balances
from stellar_portfolio.services.snapshot_runner import SnapshotRunner
from stellar_portfolio.services.performance_service import PerformanceService
from stellar_portfolio.services.account_service import AccountService
from stellar_portfolio.services.user_service import UserService
from stellar_portfolio.services.scheduler import SnapshotScheduler

__all__ = [
    "SnapshotService",
    "merge_balances",
    "SnapshotRunner",
    "PerformanceService",
    "AccountService",
    "UserService",
    "SnapshotScheduler",
]
