"""SQLAlchemy implementation of UserRepository (also serves as the UserDirectory)."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stellar_portfolio.core.exceptions import NotFoundError, ValidationError
from stellar_portfolio.core.timezone import now_utc, to_naive_utc, to_utc
from stellar_portfolio.domain.models import User
from stellar_portfolio.repositories.sqlalchemy.database import store_errors
from stellar_portfolio.repositories.sqlalchemy.orm_models import UserORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed user repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, user: User) -> User:
        """
        Persist a new user.

        The unique constraint on email settles concurrent creates; a
        violation becomes ValidationError.
        """
        orm_user = UserORM(
            user_id=user.user_id,
            email=user.email,
            display_name=user.display_name,
            primary_public_key=user.primary_public_key,
            created_at=to_naive_utc(user.created_at) if user.created_at else None,
        )
        with store_errors(self._db):
            try:
                self._db.add(orm_user)
                self._db.commit()
            except IntegrityError as e:
                self._db.rollback()
                raise ValidationError(f"User with email '{user.email}' already exists") from e
            self._db.refresh(orm_user)
        return self._to_domain(orm_user)

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        with store_errors(self._db):
            orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
        return self._to_domain(orm_user) if orm_user else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email."""
        with store_errors(self._db):
            orm_user = self._db.query(UserORM).filter(UserORM.email == email).first()
        return self._to_domain(orm_user) if orm_user else None

    def exists(self, user_id: str) -> bool:
        """Check whether a user exists."""
        with store_errors(self._db):
            return (
                self._db.query(UserORM.user_id).filter(UserORM.user_id == user_id).first()
                is not None
            )

    def list_user_ids(self) -> list[str]:
        """List all user IDs in creation order."""
        with store_errors(self._db):
            rows = self._db.query(UserORM.user_id).order_by(UserORM.created_at, UserORM.user_id).all()
        return [row[0] for row in rows]

    def list_all(self) -> list[User]:
        """List all users in creation order."""
        with store_errors(self._db):
            orm_users = self._db.query(UserORM).order_by(UserORM.created_at, UserORM.user_id).all()
        return [self._to_domain(u) for u in orm_users]

    def update(self, user: User) -> User:
        """Update email and display name of an existing user."""
        with store_errors(self._db):
            orm_user = self._db.query(UserORM).filter(UserORM.user_id == user.user_id).first()
            if not orm_user:
                raise NotFoundError("User", user.user_id)

            orm_user.email = user.email
            orm_user.display_name = user.display_name
            orm_user.updated_at = to_naive_utc(now_utc())
            try:
                self._db.commit()
            except IntegrityError as e:
                self._db.rollback()
                raise ValidationError(f"User with email '{user.email}' already exists") from e
            self._db.refresh(orm_user)
        return self._to_domain(orm_user)

    def set_primary_public_key(self, user_id: str, public_key: str) -> User:
        """Overwrite the user's primary public key."""
        with store_errors(self._db):
            orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
            if not orm_user:
                raise NotFoundError("User", user_id)
            orm_user.primary_public_key = public_key
            orm_user.updated_at = to_naive_utc(now_utc())
            self._db.commit()
            self._db.refresh(orm_user)
        return self._to_domain(orm_user)

    @staticmethod
    def _to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            email=orm.email,
            display_name=orm.display_name,
            primary_public_key=orm.primary_public_key,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            updated_at=to_utc(orm.updated_at) if orm.updated_at else None,
        )
