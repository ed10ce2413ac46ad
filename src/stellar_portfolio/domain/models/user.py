"""User domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """Portfolio owner. primary_public_key is the default linked account."""

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    primary_public_key: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)
