"""Stellar account repository protocol."""

from typing import Protocol, Optional

from stellar_portfolio.domain.models import StellarAccount


class StellarAccountRepository(Protocol):
    """Interface for linked ledger account data access."""

    def create(self, account: StellarAccount, claim_primary: bool = False) -> StellarAccount:
        """
        Persist a new account.

        With claim_primary, the owner's primary key is set to this account's
        key in the same transaction when the owner has none yet. Raises
        DuplicateAccountError if the public key is already stored.
        """
        ...

    def get_for_user(self, user_id: str, account_id: str) -> Optional[StellarAccount]:
        """Retrieve an account only if it belongs to the user."""
        ...

    def get_by_public_key(self, public_key: str) -> Optional[StellarAccount]:
        """Retrieve account by public key, active or not."""
        ...

    def list_active_by_user(self, user_id: str) -> list[StellarAccount]:
        """List active accounts for a user, newest first."""
        ...

    def count_active_by_user(self, user_id: str) -> int:
        """Count active accounts for a user."""
        ...

    def update(self, account: StellarAccount) -> StellarAccount:
        """Update label and active flag of an existing account."""
        ...
