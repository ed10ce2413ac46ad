"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from stellar_portfolio.app_context import build_snapshot_service, get_app_context
from stellar_portfolio.config.settings import get_settings
from stellar_portfolio.providers import LedgerClient, ValuationResolver
from stellar_portfolio.repositories.sqlalchemy.database import get_db, get_session_factory
from stellar_portfolio.repositories.sqlalchemy import (
    SqlAlchemySnapshotRepository,
    SqlAlchemyStellarAccountRepository,
    SqlAlchemyUserRepository,
)
from stellar_portfolio.services import (
    AccountService,
    PerformanceService,
    SnapshotService,
    UserService,
)


def get_worker_session_factory() -> sessionmaker:
    """Provide the session factory batch workers open their own sessions from."""
    return get_session_factory()


def get_ledger_client() -> LedgerClient:
    """Provide LedgerClient instance (stub unless the app context is configured)."""
    return get_app_context().ledger_client


def get_valuation_resolver() -> ValuationResolver:
    """Provide ValuationResolver instance (stub unless the app context is configured)."""
    return get_app_context().valuation_resolver


def get_user_repo(db: Session = Depends(get_db)) -> SqlAlchemyUserRepository:
    """Provide UserRepository instance."""
    return SqlAlchemyUserRepository(db)


def get_account_repo(db: Session = Depends(get_db)) -> SqlAlchemyStellarAccountRepository:
    """Provide StellarAccountRepository instance."""
    return SqlAlchemyStellarAccountRepository(db)


def get_snapshot_repo(db: Session = Depends(get_db)) -> SqlAlchemySnapshotRepository:
    """Provide SnapshotRepository instance."""
    return SqlAlchemySnapshotRepository(db)


def get_user_service(
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
) -> UserService:
    """Provide UserService instance."""
    return UserService(user_repo=user_repo)


def get_account_service(
    account_repo: SqlAlchemyStellarAccountRepository = Depends(get_account_repo),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    ledger_client: LedgerClient = Depends(get_ledger_client),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(
        account_repo=account_repo,
        user_repo=user_repo,
        ledger_client=ledger_client,
        max_accounts=get_settings().max_accounts_per_user,
    )


def get_snapshot_service(
    db: Session = Depends(get_db),
    ledger_client: LedgerClient = Depends(get_ledger_client),
    valuation_resolver: ValuationResolver = Depends(get_valuation_resolver),
) -> SnapshotService:
    """Provide SnapshotService instance."""
    return build_snapshot_service(db, ledger_client, valuation_resolver)


def get_performance_service(
    snapshot_repo: SqlAlchemySnapshotRepository = Depends(get_snapshot_repo),
) -> PerformanceService:
    """Provide PerformanceService instance."""
    return PerformanceService(snapshot_repo=snapshot_repo)
