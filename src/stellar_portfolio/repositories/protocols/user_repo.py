"""User directory and repository protocols."""

from typing import Protocol, Optional

from stellar_portfolio.domain.models import User


class UserDirectory(Protocol):
    """Read-only view of known users, used by the batch runner."""

    def list_user_ids(self) -> list[str]:
        """List all user IDs."""
        ...

    def exists(self, user_id: str) -> bool:
        """Check whether a user exists."""
        ...


class UserRepository(UserDirectory, Protocol):
    """Interface for user data access."""

    def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email."""
        ...

    def list_all(self) -> list[User]:
        """List all users."""
        ...

    def update(self, user: User) -> User:
        """Update email and display name of an existing user."""
        ...

    def set_primary_public_key(self, user_id: str, public_key: str) -> User:
        """Overwrite the user's primary public key."""
        ...
