"""User service."""

import uuid
from typing import Optional

from stellar_portfolio.core.exceptions import NotFoundError, ValidationError
from stellar_portfolio.core.timezone import now_utc
from stellar_portfolio.domain.models import User
from stellar_portfolio.repositories.protocols import UserRepository


class UserService:
    """Service for creating and looking up portfolio owners."""

    def __init__(self, user_repo: UserRepository):
        self._user_repo = user_repo

    def create_user(
        self,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> User:
        """Create a new user. Email, when given, must be unique."""
        email = self._normalize_email(email)
        if email and self._user_repo.get_by_email(email):
            raise ValidationError(f"User with email '{email}' already exists")

        user = User(
            user_id=str(uuid.uuid4()),
            email=email,
            display_name=display_name,
            created_at=now_utc(),
        )
        return self._user_repo.create(user)

    def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def list_users(self) -> list[User]:
        """List all users in creation order."""
        return self._user_repo.list_all()

    def update_user(
        self,
        user_id: str,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> User:
        """
        Update profile fields. Fields left as None are unchanged.

        A new email must not belong to another user.
        """
        user = self.get_user(user_id)

        if email is not None:
            email = self._normalize_email(email)
            if email:
                owner = self._user_repo.get_by_email(email)
                if owner and owner.user_id != user_id:
                    raise ValidationError(f"User with email '{email}' already exists")
            user.email = email
        if display_name is not None:
            user.display_name = display_name

        return self._user_repo.update(user)

    @staticmethod
    def _normalize_email(email: Optional[str]) -> Optional[str]:
        if not email:
            return None
        return email.strip().lower() or None
