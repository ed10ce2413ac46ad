"""SQLAlchemy ORM model definitions."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Boolean,
    ForeignKey,
    Index,
    JSON,
    Numeric,
)
from sqlalchemy.orm import relationship

from stellar_portfolio.repositories.sqlalchemy.database import Base


def _utcnow() -> datetime:
    # Stored naive; every timestamp column holds UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserORM(Base):
    """SQLAlchemy model for User."""

    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=True)
    display_name = Column(String(255), nullable=True)
    primary_public_key = Column(String(56), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    stellar_accounts = relationship("StellarAccountORM", back_populates="user")


class StellarAccountORM(Base):
    """SQLAlchemy model for a linked Stellar account."""

    __tablename__ = "stellar_accounts"

    account_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    # Unique across active and inactive rows: a key can never move to another user
    public_key = Column(String(56), unique=True, nullable=False)
    label = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    user = relationship("UserORM", back_populates="stellar_accounts")


class PortfolioSnapshotORM(Base):
    """
    SQLAlchemy model for PortfolioSnapshot.

    Asset balances are embedded as JSON with decimal strings; rows are
    immutable so the denormalized total is never recomputed.
    """

    __tablename__ = "portfolio_snapshots"
    __table_args__ = (
        Index("ix_portfolio_snapshots_user_created", "user_id", "created_at"),
    )

    snapshot_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False)
    created_at = Column(DateTime, nullable=False)
    asset_balances = Column(JSON, nullable=False, default=list)
    total_value_usd = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))
