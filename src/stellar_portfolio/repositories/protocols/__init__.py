"""Repository protocol definitions (interfaces)."""

from stellar_portfolio.repositories.protocols.snapshot_repo import SnapshotRepository
from stellar_portfolio.repositories.protocols.account_repo import StellarAccountRepository
from stellar_portfolio.repositories.protocols.user_repo import UserDirectory, UserRepository

__all__ = [
    "SnapshotRepository",
    "StellarAccountRepository",
    "UserDirectory",
    "UserRepository",
]
