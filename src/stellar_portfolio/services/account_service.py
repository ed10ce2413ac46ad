"""Account service for linking Stellar accounts to users."""

import logging
import uuid
from typing import Callable, Optional

from stellar_portfolio.core.exceptions import (
    AccountLimitExceededError,
    DuplicateAccountError,
    NotFoundError,
    ValidationError,
)
from stellar_portfolio.core.timezone import now_utc
from stellar_portfolio.domain.models import StellarAccount
from stellar_portfolio.providers import LedgerClient, is_valid_public_key
from stellar_portfolio.repositories.protocols import StellarAccountRepository, UserRepository

logger = logging.getLogger(__name__)

MAX_LABEL_LENGTH = 100
DEFAULT_MAX_ACCOUNTS = 10


class AccountService:
    """
    Service for managing a user's linked Stellar accounts.

    Accounts are soft-deleted so snapshot provenance survives unlinking.
    A public key can belong to one user only, ever.
    """

    def __init__(
        self,
        account_repo: StellarAccountRepository,
        user_repo: UserRepository,
        ledger_client: LedgerClient,
        max_accounts: int = DEFAULT_MAX_ACCOUNTS,
        key_validator: Callable[[str], bool] = is_valid_public_key,
    ):
        self._account_repo = account_repo
        self._user_repo = user_repo
        self._ledger = ledger_client
        self._max_accounts = max_accounts
        self._is_valid_key = key_validator

    def link_account(
        self,
        user_id: str,
        public_key: str,
        label: Optional[str] = None,
    ) -> StellarAccount:
        """
        Link a Stellar account to the user.

        The first account linked by a user without a primary key becomes
        primary in the same transaction.
        """
        if not self._is_valid_key(public_key):
            raise ValidationError(f"Invalid Stellar public key: {public_key}")
        label = self._clean_label(label)

        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        if self._account_repo.get_by_public_key(public_key):
            raise DuplicateAccountError(public_key)

        if self._account_repo.count_active_by_user(user_id) >= self._max_accounts:
            raise AccountLimitExceededError(self._max_accounts)

        self._probe_ledger(public_key)

        now = now_utc()
        account = StellarAccount(
            account_id=str(uuid.uuid4()),
            user_id=user_id,
            public_key=public_key,
            label=label,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        created = self._account_repo.create(
            account,
            claim_primary=user.primary_public_key is None,
        )
        logger.info("Linked Stellar account %s to user %s", public_key, user_id)
        return created

    def list_accounts(self, user_id: str) -> list[StellarAccount]:
        """List active linked accounts, newest first."""
        return self._account_repo.list_active_by_user(user_id)

    def get_account(self, user_id: str, account_id: str) -> StellarAccount:
        """Get an account owned by the user."""
        account = self._account_repo.get_for_user(user_id, account_id)
        if not account:
            raise NotFoundError("Stellar account", account_id)
        return account

    def update_label(
        self,
        user_id: str,
        account_id: str,
        label: Optional[str],
    ) -> StellarAccount:
        """Replace the account label."""
        account = self.get_account(user_id, account_id)
        account.label = self._clean_label(label)
        account.updated_at = now_utc()
        return self._account_repo.update(account)

    def unlink_account(self, user_id: str, account_id: str) -> None:
        """Soft delete an account (mark inactive, retain record)."""
        account = self.get_account(user_id, account_id)
        if not account.is_active:
            return  # Already unlinked

        account.is_active = False
        account.updated_at = now_utc()
        self._account_repo.update(account)
        logger.info("Unlinked Stellar account %s from user %s", account.public_key, user_id)

    def set_primary_account(self, user_id: str, account_id: str) -> None:
        """
        Make the account's key the user's primary key.

        Idempotent; inactive accounts are allowed, ownership is the only check.
        """
        account = self.get_account(user_id, account_id)
        self._user_repo.set_primary_public_key(user_id, account.public_key)

    def _probe_ledger(self, public_key: str) -> None:
        """Best-effort existence check; never blocks linking."""
        try:
            if not self._ledger.account_exists(public_key):
                logger.warning(
                    "Adding Stellar account that doesn't exist on network yet: %s",
                    public_key,
                )
        except Exception as e:
            logger.debug("Could not verify account existence for %s: %s", public_key, e)

    @staticmethod
    def _clean_label(label: Optional[str]) -> Optional[str]:
        if label is None:
            return None
        label = label.strip()
        if not label:
            return None
        if len(label) > MAX_LABEL_LENGTH:
            raise ValidationError(f"Label cannot exceed {MAX_LABEL_LENGTH} characters")
        return label
