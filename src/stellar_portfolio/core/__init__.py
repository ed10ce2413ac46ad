"""Core utilities and shared functionality."""

from stellar_portfolio.core.timezone import (
    now_utc,
    to_utc,
    to_naive_utc,
    parse_datetime_utc,
    UTC,
)
from stellar_portfolio.core.money import (
    to_decimal,
    round_usd,
    sum_usd,
    percentage_change,
)
from stellar_portfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ValuationUnavailableError,
    LedgerUnavailableError,
    NoSnapshotDataError,
    DuplicateAccountError,
    AccountLimitExceededError,
    StoreUnavailableError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "to_naive_utc",
    "parse_datetime_utc",
    "UTC",
    "to_decimal",
    "round_usd",
    "sum_usd",
    "percentage_change",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ValuationUnavailableError",
    "LedgerUnavailableError",
    "NoSnapshotDataError",
    "DuplicateAccountError",
    "AccountLimitExceededError",
    "StoreUnavailableError",
]
