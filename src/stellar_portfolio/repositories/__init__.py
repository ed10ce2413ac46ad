"""Repository layer - data access abstractions and implementations."""

from stellar_portfolio.repositories.protocols import (
    SnapshotRepository,
    StellarAccountRepository,
    UserDirectory,
    UserRepository,
)

__all__ = [
    "SnapshotRepository",
    "StellarAccountRepository",
    "UserDirectory",
    "UserRepository",
]
