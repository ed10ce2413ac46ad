"""
Pytest configuration and fixtures for Stellar portfolio tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic fake ledger and valuation providers
- Factory helpers for users, linked accounts and snapshots
- Time helpers for UTC
- Service and repository fixtures
"""

import threading
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from stellar_portfolio.main import app
from stellar_portfolio.api.deps import get_worker_session_factory
from stellar_portfolio.app_context import AppContext, set_app_context
from stellar_portfolio.config.settings import Settings, set_settings, reset_settings
from stellar_portfolio.core.exceptions import ValuationUnavailableError
from stellar_portfolio.core.timezone import UTC
from stellar_portfolio.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from stellar_portfolio.repositories.sqlalchemy import orm_models  # noqa: F401
from stellar_portfolio.repositories.sqlalchemy import (
    SqlAlchemySnapshotRepository,
    SqlAlchemyStellarAccountRepository,
    SqlAlchemyUserRepository,
)
from stellar_portfolio.domain.models import (
    AssetBalance,
    PortfolioSnapshot,
    RawBalance,
    StellarAccount,
    User,
)
from stellar_portfolio.services import (
    AccountService,
    PerformanceService,
    SnapshotService,
    UserService,
)


BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
USDC_ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"


# =============================================================================
# TIME AND KEY HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware datetime in UTC."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


def make_public_key(n: int) -> str:
    """Build a structurally valid, unique Stellar public key for index n."""
    digits = []
    for _ in range(11):
        digits.append(BASE32_ALPHABET[n % 32])
        n //= 32
    return "G" + "".join(digits) + "A" * 44


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 12, 0, 0)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(test_session_factory) -> Session:
    """Create test database session."""
    session = test_session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def user_repo(test_session) -> SqlAlchemyUserRepository:
    """Provide test UserRepository."""
    return SqlAlchemyUserRepository(test_session)


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyStellarAccountRepository:
    """Provide test StellarAccountRepository."""
    return SqlAlchemyStellarAccountRepository(test_session)


@pytest.fixture
def snapshot_repo(test_session) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(test_session)


# =============================================================================
# PROVIDER FIXTURES
# =============================================================================


class FakeLedgerClient:
    """
    Deterministic ledger client for testing.

    Balances are configured per public key; unknown keys are unfunded.
    """

    def __init__(
        self,
        balances: Optional[dict[str, list[RawBalance]]] = None,
        failing_keys: Optional[set[str]] = None,
        exists: bool = True,
        probe_error: Optional[Exception] = None,
    ):
        self.balances = dict(balances or {})
        self.failing_keys = set(failing_keys or ())
        self.exists = exists
        self.probe_error = probe_error

    def get_balances(self, public_key: str) -> list[RawBalance]:
        if public_key in self.failing_keys:
            raise ConnectionError("Horizon unreachable")
        return list(self.balances.get(public_key, []))

    def account_exists(self, public_key: str) -> bool:
        if self.probe_error is not None:
            raise self.probe_error
        return self.exists


class FixedPriceResolver:
    """
    Valuation resolver with fixed USD prices per asset code.

    Unpriced assets raise ValuationUnavailableError; assets listed in
    failing_assets raise a transport error instead.
    """

    DEFAULT_PRICES = {
        "XLM": Decimal("0.12"),
        "USDC": Decimal("1.00"),
    }

    def __init__(
        self,
        prices: Optional[dict[str, Decimal]] = None,
        failing_assets: Optional[set[str]] = None,
    ):
        self.prices = dict(self.DEFAULT_PRICES if prices is None else prices)
        self.failing_assets = set(failing_assets or ())
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def resolve(self, asset_code: str, asset_issuer: Optional[str], amount: Decimal) -> Decimal:
        with self._lock:
            self.calls.append(asset_code)
        if asset_code in self.failing_assets:
            raise TimeoutError("price feed timed out")
        price = self.prices.get(asset_code)
        if price is None:
            raise ValuationUnavailableError(asset_code)
        return amount * price


class ConstantResolver:
    """Resolver returning the same raw value for every asset."""

    def __init__(self, value):
        self.value = value

    def resolve(self, asset_code: str, asset_issuer: Optional[str], amount: Decimal):
        return self.value


@pytest.fixture
def ledger_client() -> FakeLedgerClient:
    """Provide a deterministic ledger client."""
    return FakeLedgerClient()


@pytest.fixture
def valuation_resolver() -> FixedPriceResolver:
    """Provide a fixed price resolver."""
    return FixedPriceResolver()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def user_service(user_repo) -> UserService:
    """Provide test UserService."""
    return UserService(user_repo=user_repo)


@pytest.fixture
def account_service(account_repo, user_repo, ledger_client) -> AccountService:
    """Provide test AccountService."""
    return AccountService(
        account_repo=account_repo,
        user_repo=user_repo,
        ledger_client=ledger_client,
        max_accounts=10,
    )


@pytest.fixture
def snapshot_service(
    snapshot_repo,
    account_repo,
    user_repo,
    ledger_client,
    valuation_resolver,
    fixed_now,
) -> SnapshotService:
    """Provide test SnapshotService with a frozen clock."""
    return SnapshotService(
        snapshot_repo=snapshot_repo,
        account_repo=account_repo,
        user_directory=user_repo,
        ledger_client=ledger_client,
        valuation_resolver=valuation_resolver,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def performance_service(snapshot_repo, fixed_now) -> PerformanceService:
    """Provide test PerformanceService with a frozen clock."""
    return PerformanceService(snapshot_repo=snapshot_repo, clock=lambda: fixed_now)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def user_factory(user_service) -> Callable[..., User]:
    """Factory for creating test users."""

    def _create_user(
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> User:
        if display_name is None:
            display_name = f"Test User {uuid.uuid4().hex[:8]}"
        return user_service.create_user(email=email, display_name=display_name)

    return _create_user


@pytest.fixture
def linked_account_factory(
    account_service,
    ledger_client,
) -> Callable[..., StellarAccount]:
    """Factory for linking accounts with configured ledger balances."""
    counter = iter(range(1, 10_000))

    def _link(
        user_id: str,
        balances: Optional[list[RawBalance]] = None,
        public_key: Optional[str] = None,
        label: Optional[str] = None,
    ) -> StellarAccount:
        if public_key is None:
            public_key = make_public_key(next(counter))
        if balances is not None:
            ledger_client.balances[public_key] = balances
        return account_service.link_account(user_id, public_key, label=label)

    return _link


@pytest.fixture
def snapshot_factory(snapshot_repo) -> Callable[..., PortfolioSnapshot]:
    """Factory for appending snapshots with explicit timestamps and totals."""

    def _create_snapshot(
        user_id: str,
        created_at: datetime,
        total_value_usd: str,
        snapshot_id: Optional[str] = None,
    ) -> PortfolioSnapshot:
        total = Decimal(total_value_usd)
        snapshot = PortfolioSnapshot(
            snapshot_id=snapshot_id or str(uuid.uuid4()),
            user_id=user_id,
            created_at=created_at,
            total_value_usd=total,
            asset_balances=(
                AssetBalance(
                    asset_code="XLM",
                    asset_issuer=None,
                    amount=total / Decimal("0.12"),
                    value_usd=total,
                ),
            ),
        )
        return snapshot_repo.append(snapshot)

    return _create_snapshot


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, test_session_factory, tmp_path, ledger_client, valuation_resolver) -> TestClient:
    """Provide FastAPI test client with test database and fake providers."""

    def override_get_db():
        session = test_session_factory()
        try:
            yield session
        finally:
            session.close()

    # Lifespan creates its own engine; keep it away from the home directory
    set_settings(Settings(data_dir=tmp_path, snapshot_max_workers=1))
    reset_database()
    set_app_context(AppContext(ledger_client=ledger_client, valuation_resolver=valuation_resolver))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_worker_session_factory] = lambda: test_session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

    set_app_context(None)
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def xlm(amount: str) -> RawBalance:
    """Native lumen balance."""
    return RawBalance(asset_code="XLM", amount=Decimal(amount))


def usdc(amount: str) -> RawBalance:
    """USDC balance from the well-known issuer."""
    return RawBalance(asset_code="USDC", amount=Decimal(amount), asset_issuer=USDC_ISSUER)
