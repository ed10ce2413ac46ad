"""Ledger network client protocol and public key validation."""

import re
from typing import Protocol

from stellar_portfolio.domain.models import RawBalance

# Stellar account IDs: "G" + 55 chars of RFC 4648 base32
_PUBLIC_KEY_RE = re.compile(r"^G[A-Z2-7]{55}$")


def is_valid_public_key(public_key: str) -> bool:
    """Structural check for a Stellar account public key (no checksum verification)."""
    if not isinstance(public_key, str):
        return False
    return bool(_PUBLIC_KEY_RE.match(public_key))


class LedgerClient(Protocol):
    """
    Protocol for ledger network access.

    Implementations talk to the network (e.g. Horizon); the core only needs
    balances and an existence probe.
    """

    def get_balances(self, public_key: str) -> list[RawBalance]:
        """
        Fetch current balances for an account.

        Unfunded accounts return an empty list. Network failures raise.
        """
        ...

    def account_exists(self, public_key: str) -> bool:
        """Check whether the account is funded on the network. May raise."""
        ...
