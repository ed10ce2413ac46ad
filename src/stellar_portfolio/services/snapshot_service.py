"""Snapshot service: builds, persists and pages portfolio snapshots."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from stellar_portfolio.core.exceptions import (
    AppError,
    LedgerUnavailableError,
    NotFoundError,
    ValidationError,
    ValuationUnavailableError,
)
from stellar_portfolio.core.money import sum_usd, to_decimal
from stellar_portfolio.core.timezone import now_utc
from stellar_portfolio.domain.models import AssetBalance, PortfolioSnapshot, RawBalance
from stellar_portfolio.domain.views import SnapshotPage
from stellar_portfolio.providers import LedgerClient, ValuationResolver
from stellar_portfolio.repositories.protocols import (
    SnapshotRepository,
    StellarAccountRepository,
    UserDirectory,
)

logger = logging.getLogger(__name__)


class SnapshotService:
    """
    Service for capturing point-in-time portfolio valuations.

    A snapshot is all-or-nothing: if any asset cannot be valued, nothing
    is written. On success exactly one row is appended to the store.
    """

    def __init__(
        self,
        snapshot_repo: SnapshotRepository,
        account_repo: StellarAccountRepository,
        user_directory: UserDirectory,
        ledger_client: LedgerClient,
        valuation_resolver: ValuationResolver,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._snapshot_repo = snapshot_repo
        self._account_repo = account_repo
        self._users = user_directory
        self._ledger = ledger_client
        self._resolver = valuation_resolver
        self._clock = clock

    def create_snapshot(self, user_id: str) -> PortfolioSnapshot:
        """
        Capture a snapshot of every active linked account of the user.

        Balances of the same asset held in several accounts are merged
        before valuation.
        """
        if not self._users.exists(user_id):
            raise NotFoundError("User", user_id)

        balances: list[RawBalance] = []
        for account in self._account_repo.list_active_by_user(user_id):
            try:
                balances.extend(self._ledger.get_balances(account.public_key))
            except AppError:
                raise
            except Exception as e:
                raise LedgerUnavailableError(account.public_key, str(e)) from e

        return self.build(user_id, merge_balances(balances))

    def build(self, user_id: str, balances: Sequence[RawBalance]) -> PortfolioSnapshot:
        """
        Value the balances, total them and append the snapshot.

        The total is the exact decimal sum of asset values, rounded once.
        """
        asset_balances = tuple(
            AssetBalance(
                asset_code=balance.asset_code,
                asset_issuer=balance.asset_issuer,
                amount=balance.amount,
                value_usd=self._value_of(balance),
            )
            for balance in balances
        )

        snapshot = PortfolioSnapshot(
            snapshot_id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=self._clock(),
            total_value_usd=sum_usd(b.value_usd for b in asset_balances),
            asset_balances=asset_balances,
        )
        saved = self._snapshot_repo.append(snapshot)
        logger.debug(
            "Snapshot %s for user %s: %d assets, $%s",
            saved.snapshot_id, user_id, len(asset_balances), saved.total_value_usd,
        )
        return saved

    def get_history(self, user_id: str, page: int = 1, limit: int = 10) -> SnapshotPage:
        """Page through a user's snapshots, newest first. No data gives an empty page."""
        if page < 1:
            raise ValidationError("page must be >= 1")
        if limit < 1:
            raise ValidationError("limit must be >= 1")

        snapshots, total = self._snapshot_repo.page(user_id, page, limit)
        return SnapshotPage(snapshots=snapshots, total=total, page=page, limit=limit)

    def _value_of(self, balance: RawBalance) -> Decimal:
        try:
            raw_value = self._resolver.resolve(
                balance.asset_code, balance.asset_issuer, balance.amount
            )
        except AppError:
            raise
        except Exception as e:
            raise ValuationUnavailableError(balance.label, str(e)) from e

        if raw_value is None:
            raise ValuationUnavailableError(balance.label)
        try:
            value = to_decimal(raw_value)
        except ValueError as e:
            raise ValuationUnavailableError(balance.label, "non-numeric value") from e
        if value < 0:
            raise ValuationUnavailableError(balance.label, "negative value")
        return value


def merge_balances(balances: Sequence[RawBalance]) -> list[RawBalance]:
    """Sum amounts of identical assets, keeping first-seen order."""
    merged: dict[tuple[str, Optional[str]], Decimal] = {}
    for balance in balances:
        key = balance.asset_key
        merged[key] = merged.get(key, Decimal("0")) + to_decimal(balance.amount)
    return [
        RawBalance(asset_code=code, asset_issuer=issuer, amount=amount)
        for (code, issuer), amount in merged.items()
    ]
