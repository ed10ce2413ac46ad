"""SQLAlchemy implementation of StellarAccountRepository."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stellar_portfolio.core.exceptions import DuplicateAccountError, NotFoundError
from stellar_portfolio.core.timezone import to_naive_utc, to_utc
from stellar_portfolio.domain.models import StellarAccount
from stellar_portfolio.repositories.sqlalchemy.database import store_errors
from stellar_portfolio.repositories.sqlalchemy.orm_models import StellarAccountORM, UserORM


class SqlAlchemyStellarAccountRepository:
    """SQLAlchemy-backed repository for linked Stellar accounts."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: StellarAccount, claim_primary: bool = False) -> StellarAccount:
        """
        Persist a new account.

        The unique constraint on public_key is the final arbiter for
        concurrent link attempts; a violation becomes DuplicateAccountError.
        """
        orm_account = StellarAccountORM(
            account_id=account.account_id,
            user_id=account.user_id,
            public_key=account.public_key,
            label=account.label,
            is_active=account.is_active,
            created_at=to_naive_utc(account.created_at) if account.created_at else None,
            updated_at=to_naive_utc(account.updated_at) if account.updated_at else None,
        )
        with store_errors(self._db):
            try:
                self._db.add(orm_account)
                self._db.flush()
                if claim_primary:
                    # Conditional update keeps an existing primary untouched
                    self._db.query(UserORM).filter(
                        UserORM.user_id == account.user_id,
                        UserORM.primary_public_key.is_(None),
                    ).update(
                        {UserORM.primary_public_key: account.public_key},
                        synchronize_session=False,
                    )
                self._db.commit()
            except IntegrityError as e:
                self._db.rollback()
                raise DuplicateAccountError(account.public_key) from e
            self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def get_for_user(self, user_id: str, account_id: str) -> Optional[StellarAccount]:
        """Retrieve an account only if it belongs to the user."""
        with store_errors(self._db):
            orm_account = self._db.query(StellarAccountORM).filter(
                StellarAccountORM.account_id == account_id,
                StellarAccountORM.user_id == user_id,
            ).first()
        return self._to_domain(orm_account) if orm_account else None

    def get_by_public_key(self, public_key: str) -> Optional[StellarAccount]:
        """Retrieve account by public key, active or not."""
        with store_errors(self._db):
            orm_account = self._db.query(StellarAccountORM).filter(
                StellarAccountORM.public_key == public_key
            ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_active_by_user(self, user_id: str) -> list[StellarAccount]:
        """List active accounts for a user, newest first."""
        with store_errors(self._db):
            orm_accounts = (
                self._db.query(StellarAccountORM)
                .filter(
                    StellarAccountORM.user_id == user_id,
                    StellarAccountORM.is_active == True,  # noqa: E712
                )
                .order_by(StellarAccountORM.created_at.desc(), StellarAccountORM.account_id)
                .all()
            )
        return [self._to_domain(a) for a in orm_accounts]

    def count_active_by_user(self, user_id: str) -> int:
        """Count active accounts for a user."""
        with store_errors(self._db):
            return (
                self._db.query(StellarAccountORM)
                .filter(
                    StellarAccountORM.user_id == user_id,
                    StellarAccountORM.is_active == True,  # noqa: E712
                )
                .count()
            )

    def update(self, account: StellarAccount) -> StellarAccount:
        """Update label and active flag of an existing account."""
        with store_errors(self._db):
            orm_account = self._db.query(StellarAccountORM).filter(
                StellarAccountORM.account_id == account.account_id
            ).first()
            if not orm_account:
                raise NotFoundError("Stellar account", account.account_id)

            orm_account.label = account.label
            orm_account.is_active = account.is_active
            if account.updated_at:
                orm_account.updated_at = to_naive_utc(account.updated_at)

            self._db.commit()
            self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    @staticmethod
    def _to_domain(orm: StellarAccountORM) -> StellarAccount:
        """Convert ORM model to domain model."""
        return StellarAccount(
            account_id=orm.account_id,
            user_id=orm.user_id,
            public_key=orm.public_key,
            label=orm.label,
            is_active=orm.is_active,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            updated_at=to_utc(orm.updated_at) if orm.updated_at else None,
        )
