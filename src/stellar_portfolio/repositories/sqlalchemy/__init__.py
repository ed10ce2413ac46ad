"""SQLAlchemy repository implementations."""

from stellar_portfolio.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    session_scope,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from stellar_portfolio.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository
from stellar_portfolio.repositories.sqlalchemy.account_repo import SqlAlchemyStellarAccountRepository
from stellar_portfolio.repositories.sqlalchemy.user_repo import SqlAlchemyUserRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "session_scope",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemySnapshotRepository",
    "SqlAlchemyStellarAccountRepository",
    "SqlAlchemyUserRepository",
]
