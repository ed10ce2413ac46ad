"""Application context for in-process service management.

Provides a centralized way to access services without HTTP, and the
session-per-job wiring the batch runner and scheduler rely on.
"""

from pathlib import Path
from typing import Callable, Optional

from sqlalchemy.orm import Session, sessionmaker

from stellar_portfolio.config.settings import Settings, set_settings, get_settings
from stellar_portfolio.domain.models import PortfolioSnapshot
from stellar_portfolio.domain.views import SnapshotRunResult
from stellar_portfolio.providers import (
    LedgerClient,
    ValuationResolver,
    StubLedgerClient,
    StubValuationResolver,
)
from stellar_portfolio.repositories.sqlalchemy import (
    SqlAlchemySnapshotRepository,
    SqlAlchemyStellarAccountRepository,
    SqlAlchemyUserRepository,
    get_session,
    get_session_factory,
    init_db_with_path,
    reset_database,
    session_scope,
)
from stellar_portfolio.services import (
    AccountService,
    PerformanceService,
    SnapshotRunner,
    SnapshotService,
    UserService,
)


def build_snapshot_service(
    db: Session,
    ledger_client: LedgerClient,
    valuation_resolver: ValuationResolver,
) -> SnapshotService:
    """Wire a SnapshotService onto one session."""
    user_repo = SqlAlchemyUserRepository(db)
    return SnapshotService(
        snapshot_repo=SqlAlchemySnapshotRepository(db),
        account_repo=SqlAlchemyStellarAccountRepository(db),
        user_directory=user_repo,
        ledger_client=ledger_client,
        valuation_resolver=valuation_resolver,
    )


def snapshot_job(
    session_factory: sessionmaker,
    ledger_client: LedgerClient,
    valuation_resolver: ValuationResolver,
) -> Callable[[str], PortfolioSnapshot]:
    """Return a create_snapshot callable that opens its own session per user."""

    def _create_snapshot(user_id: str) -> PortfolioSnapshot:
        with session_scope(session_factory) as db:
            service = build_snapshot_service(db, ledger_client, valuation_resolver)
            return service.create_snapshot(user_id)

    return _create_snapshot


def run_snapshots_for_all_users(
    session_factory: sessionmaker,
    ledger_client: LedgerClient,
    valuation_resolver: ValuationResolver,
    max_workers: int,
) -> SnapshotRunResult:
    """Batch entry point shared by the scheduler, the API trigger and scripts."""
    with session_scope(session_factory) as db:
        runner = SnapshotRunner(
            user_directory=SqlAlchemyUserRepository(db),
            create_snapshot=snapshot_job(session_factory, ledger_client, valuation_resolver),
            max_workers=max_workers,
        )
        return runner.run_for_all_users()


class AppContext:
    """
    Application context providing in-process access to all services.

    Used by the scheduler and by scripts that do not go through FastAPI.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        ledger_client: Optional[LedgerClient] = None,
        valuation_resolver: Optional[ValuationResolver] = None,
    ):
        self._data_dir = data_dir
        self._session: Optional[Session] = None
        self._initialized = False
        self.ledger_client: LedgerClient = ledger_client or StubLedgerClient()
        self.valuation_resolver: ValuationResolver = valuation_resolver or StubValuationResolver()

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses default if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        reset_database()
        init_db_with_path(settings.get_data_dir() / "portfolio.db")

        self.close()
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Directory holding the database."""
        return get_settings().get_data_dir()

    def _get_session(self) -> Session:
        """Get or create database session."""
        if self._session is None:
            self._session = get_session()
        return self._session

    @property
    def users(self) -> UserService:
        return UserService(SqlAlchemyUserRepository(self._get_session()))

    @property
    def accounts(self) -> AccountService:
        db = self._get_session()
        return AccountService(
            account_repo=SqlAlchemyStellarAccountRepository(db),
            user_repo=SqlAlchemyUserRepository(db),
            ledger_client=self.ledger_client,
            max_accounts=get_settings().max_accounts_per_user,
        )

    @property
    def snapshots(self) -> SnapshotService:
        return build_snapshot_service(
            self._get_session(), self.ledger_client, self.valuation_resolver
        )

    @property
    def performance(self) -> PerformanceService:
        return PerformanceService(SqlAlchemySnapshotRepository(self._get_session()))

    def run_snapshots(self) -> SnapshotRunResult:
        """Snapshot every user; same semantics for scheduled and manual runs."""
        return run_snapshots_for_all_users(
            session_factory=get_session_factory(),
            ledger_client=self.ledger_client,
            valuation_resolver=self.valuation_resolver,
            max_workers=get_settings().snapshot_max_workers,
        )

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None


# Global application context (singleton for the scheduler and scripts)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear with None) the global application context."""
    global _app_context
    _app_context = context
