"""
Unit tests for SnapshotService.

Tests cover:
- Building snapshots from raw balances (valuation, single rounding)
- All-or-nothing persistence when valuation fails
- Creating snapshots from a user's active linked accounts
- Ledger failures
- Paginated history
- Balance merging
"""

import pytest
from datetime import timedelta
from decimal import Decimal

from stellar_portfolio.core.exceptions import (
    LedgerUnavailableError,
    NotFoundError,
    ValidationError,
    ValuationUnavailableError,
)
from stellar_portfolio.domain.models import RawBalance
from stellar_portfolio.repositories.sqlalchemy import SqlAlchemySnapshotRepository
from stellar_portfolio.services import SnapshotService, merge_balances

from tests.conftest import (
    ConstantResolver,
    FixedPriceResolver,
    USDC_ISSUER,
    usdc,
    utc_datetime,
    xlm,
)


def _service_with_resolver(snapshot_service: SnapshotService, resolver) -> SnapshotService:
    snapshot_service._resolver = resolver
    return snapshot_service


# =============================================================================
# BUILD TESTS
# =============================================================================


class TestBuildSnapshot:
    """Tests for valuing and persisting a snapshot."""

    def test_build_values_each_asset_and_totals(
        self,
        snapshot_service: SnapshotService,
        snapshot_repo: SqlAlchemySnapshotRepository,
        user_factory,
        fixed_now,
    ):
        """
        GIVEN 1000 XLM at $0.12 and 50.5 USDC at $1.00
        WHEN a snapshot is built
        THEN asset values are 120 and 50.5 and the total is 170.50
        """
        user = user_factory()

        snapshot = snapshot_service.build(user.user_id, [xlm("1000"), usdc("50.5")])

        assert snapshot.snapshot_id
        assert snapshot.user_id == user.user_id
        assert snapshot.created_at == fixed_now
        assert snapshot.total_value_usd == Decimal("170.50")
        values = {b.asset_code: b.value_usd for b in snapshot.asset_balances}
        assert values == {"XLM": Decimal("120.00"), "USDC": Decimal("50.50")}

        stored = snapshot_repo.latest(user.user_id)
        assert stored.snapshot_id == snapshot.snapshot_id
        assert stored.total_value_usd == Decimal("170.50")

    def test_total_is_rounded_once_from_exact_sum(
        self,
        snapshot_service: SnapshotService,
        user_factory,
    ):
        """
        GIVEN three assets each worth $0.333333
        WHEN a snapshot is built
        THEN the total is 1.00 (exact sum rounded), not 0.99
        """
        user = user_factory()
        resolver = FixedPriceResolver(prices={
            "AAA": Decimal("0.333333"),
            "BBB": Decimal("0.333333"),
            "CCC": Decimal("0.333333"),
        })
        service = _service_with_resolver(snapshot_service, resolver)

        snapshot = service.build(user.user_id, [
            RawBalance(asset_code="AAA", amount=Decimal("1")),
            RawBalance(asset_code="BBB", amount=Decimal("1")),
            RawBalance(asset_code="CCC", amount=Decimal("1")),
        ])

        assert snapshot.total_value_usd == Decimal("1.00")

    def test_total_matches_sum_of_asset_values(
        self,
        snapshot_service: SnapshotService,
        user_factory,
    ):
        user = user_factory()

        snapshot = snapshot_service.build(user.user_id, [xlm("1234.5678901"), usdc("0.01")])

        exact = sum(b.value_usd for b in snapshot.asset_balances)
        assert snapshot.total_value_usd == exact.quantize(Decimal("0.01"))

    def test_empty_balances_give_zero_snapshot(
        self,
        snapshot_service: SnapshotService,
        snapshot_repo: SqlAlchemySnapshotRepository,
        user_factory,
    ):
        """
        GIVEN no balances
        WHEN a snapshot is built
        THEN a $0.00 snapshot with no assets is persisted
        """
        user = user_factory()

        snapshot = snapshot_service.build(user.user_id, [])

        assert snapshot.total_value_usd == Decimal("0.00")
        assert snapshot.asset_balances == ()
        assert snapshot_repo.latest(user.user_id) is not None

    def test_unpriced_asset_writes_nothing(
        self,
        snapshot_service: SnapshotService,
        snapshot_repo: SqlAlchemySnapshotRepository,
        user_factory,
    ):
        """
        GIVEN an XLM balance and an asset the resolver cannot price
        WHEN a snapshot is built
        THEN ValuationUnavailableError is raised and no snapshot is stored
        """
        user = user_factory()

        with pytest.raises(ValuationUnavailableError):
            snapshot_service.build(user.user_id, [
                xlm("100"),
                RawBalance(asset_code="SHADY", amount=Decimal("5"), asset_issuer="GXYZ"),
            ])

        assert snapshot_repo.latest(user.user_id) is None

    def test_resolver_transport_error_is_wrapped(
        self,
        snapshot_service: SnapshotService,
        snapshot_repo: SqlAlchemySnapshotRepository,
        user_factory,
    ):
        """
        GIVEN a resolver that times out for USDC
        WHEN a snapshot is built
        THEN ValuationUnavailableError names the asset and nothing is stored
        """
        user = user_factory()
        service = _service_with_resolver(
            snapshot_service, FixedPriceResolver(failing_assets={"USDC"})
        )

        with pytest.raises(ValuationUnavailableError) as exc_info:
            service.build(user.user_id, [xlm("100"), usdc("10")])

        assert f"USDC:{USDC_ISSUER}" in exc_info.value.message
        assert snapshot_repo.latest(user.user_id) is None

    @pytest.mark.parametrize("raw_value", [None, "not-a-number", Decimal("-1")])
    def test_unusable_resolver_values_are_rejected(
        self,
        snapshot_service: SnapshotService,
        snapshot_repo: SqlAlchemySnapshotRepository,
        user_factory,
        raw_value,
    ):
        user = user_factory()
        service = _service_with_resolver(snapshot_service, ConstantResolver(raw_value))

        with pytest.raises(ValuationUnavailableError):
            service.build(user.user_id, [xlm("100")])

        assert snapshot_repo.latest(user.user_id) is None

    def test_float_resolver_values_are_accepted(
        self,
        snapshot_service: SnapshotService,
        user_factory,
    ):
        user = user_factory()
        service = _service_with_resolver(snapshot_service, ConstantResolver(0.1))

        snapshot = service.build(user.user_id, [xlm("1"), usdc("1"), usdc("2")])

        assert snapshot.total_value_usd == Decimal("0.30")


# =============================================================================
# CREATE SNAPSHOT TESTS
# =============================================================================


class TestCreateSnapshot:
    """Tests for snapshotting a user's linked accounts."""

    def test_create_snapshot_unknown_user(self, snapshot_service: SnapshotService):
        with pytest.raises(NotFoundError):
            snapshot_service.create_snapshot("no-such-user")

    def test_create_snapshot_merges_active_accounts(
        self,
        snapshot_service: SnapshotService,
        account_service,
        user_factory,
        linked_account_factory,
    ):
        """
        GIVEN two active accounts holding XLM and one unlinked account
        WHEN a snapshot is created
        THEN XLM from active accounts is merged and the unlinked one is ignored
        """
        user = user_factory()
        linked_account_factory(user.user_id, balances=[xlm("1000"), usdc("25")])
        linked_account_factory(user.user_id, balances=[xlm("500")])
        gone = linked_account_factory(user.user_id, balances=[xlm("99999")])
        account_service.unlink_account(user.user_id, gone.account_id)

        snapshot = snapshot_service.create_snapshot(user.user_id)

        amounts = {b.asset_code: b.amount for b in snapshot.asset_balances}
        assert amounts == {"XLM": Decimal("1500"), "USDC": Decimal("25")}
        assert snapshot.total_value_usd == Decimal("205.00")

    def test_create_snapshot_without_accounts_is_zero(
        self,
        snapshot_service: SnapshotService,
        user_factory,
    ):
        user = user_factory()

        snapshot = snapshot_service.create_snapshot(user.user_id)

        assert snapshot.total_value_usd == Decimal("0.00")

    def test_ledger_failure_writes_nothing(
        self,
        snapshot_service: SnapshotService,
        snapshot_repo: SqlAlchemySnapshotRepository,
        ledger_client,
        user_factory,
        linked_account_factory,
    ):
        """
        GIVEN a linked account whose balances cannot be fetched
        WHEN a snapshot is created
        THEN LedgerUnavailableError is raised and nothing is stored
        """
        user = user_factory()
        account = linked_account_factory(user.user_id, balances=[xlm("10")])
        ledger_client.failing_keys.add(account.public_key)

        with pytest.raises(LedgerUnavailableError):
            snapshot_service.create_snapshot(user.user_id)

        assert snapshot_repo.latest(user.user_id) is None


# =============================================================================
# HISTORY TESTS
# =============================================================================


class TestGetHistory:
    """Tests for paginated history."""

    def test_pages_newest_first(
        self,
        snapshot_service: SnapshotService,
        snapshot_factory,
        user_factory,
    ):
        """
        GIVEN 25 snapshots taken one hour apart
        WHEN page 2 with limit 10 is requested
        THEN snapshots 11-20 (newest first) are returned with 3 total pages
        """
        user = user_factory()
        for hour in range(25):
            snapshot_factory(user.user_id, utc_datetime(2024, 6, 1, 0) + timedelta(hours=hour), f"{hour}.00")

        history = snapshot_service.get_history(user.user_id, page=2, limit=10)

        assert history.total == 25
        assert history.total_pages == 3
        assert [s.total_value_usd for s in history.snapshots] == [
            Decimal(f"{hour}.00") for hour in range(14, 4, -1)
        ]

    def test_last_page_is_partial(
        self,
        snapshot_service: SnapshotService,
        snapshot_factory,
        user_factory,
    ):
        user = user_factory()
        for hour in range(25):
            snapshot_factory(user.user_id, utc_datetime(2024, 6, 1, 0) + timedelta(hours=hour), "1.00")

        history = snapshot_service.get_history(user.user_id, page=3, limit=10)

        assert len(history.snapshots) == 5

    def test_no_snapshots_is_empty_page(
        self,
        snapshot_service: SnapshotService,
        user_factory,
    ):
        user = user_factory()

        history = snapshot_service.get_history(user.user_id)

        assert history.snapshots == []
        assert history.total == 0
        assert history.total_pages == 0

    def test_history_is_scoped_to_user(
        self,
        snapshot_service: SnapshotService,
        snapshot_factory,
        user_factory,
    ):
        alice = user_factory()
        bob = user_factory()
        snapshot_factory(alice.user_id, utc_datetime(2024, 6, 1), "10.00")
        snapshot_factory(bob.user_id, utc_datetime(2024, 6, 1), "20.00")

        history = snapshot_service.get_history(alice.user_id)

        assert history.total == 1
        assert history.snapshots[0].user_id == alice.user_id

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_invalid_paging_rejected(
        self,
        snapshot_service: SnapshotService,
        page: int,
        limit: int,
    ):
        with pytest.raises(ValidationError):
            snapshot_service.get_history("any", page=page, limit=limit)


# =============================================================================
# MERGE TESTS
# =============================================================================


class TestMergeBalances:
    """Tests for merge_balances."""

    def test_same_code_different_issuer_kept_apart(self):
        """
        GIVEN USDC from two different issuers
        WHEN balances are merged
        THEN they remain separate assets
        """
        merged = merge_balances([
            RawBalance(asset_code="USDC", amount=Decimal("1"), asset_issuer="GAAA"),
            RawBalance(asset_code="USDC", amount=Decimal("2"), asset_issuer="GBBB"),
            RawBalance(asset_code="USDC", amount=Decimal("3"), asset_issuer="GAAA"),
        ])

        assert [(b.asset_issuer, b.amount) for b in merged] == [
            ("GAAA", Decimal("4")),
            ("GBBB", Decimal("2")),
        ]

    def test_first_seen_order(self):
        merged = merge_balances([usdc("1"), xlm("2"), usdc("3")])

        assert [b.asset_code for b in merged] == ["USDC", "XLM"]
