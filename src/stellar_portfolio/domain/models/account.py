"""Stellar account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class StellarAccount:
    """
    Ledger account linked to a user.

    Never hard-deleted: unlinking clears is_active so snapshot
    provenance stays intact.
    """

    account_id: str
    user_id: str
    public_key: str
    label: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)
