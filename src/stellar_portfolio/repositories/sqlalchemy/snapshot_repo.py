"""SQLAlchemy implementation of SnapshotRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from stellar_portfolio.core.money import round_usd
from stellar_portfolio.core.timezone import to_naive_utc, to_utc
from stellar_portfolio.domain.models import AssetBalance, PortfolioSnapshot
from stellar_portfolio.repositories.sqlalchemy.database import store_errors
from stellar_portfolio.repositories.sqlalchemy.orm_models import PortfolioSnapshotORM


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed snapshot store."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
        """Persist a new snapshot in a single commit."""
        orm_snapshot = self._to_orm(snapshot)
        with store_errors(self._db):
            try:
                self._db.add(orm_snapshot)
                self._db.commit()
            except Exception:
                self._db.rollback()
                raise
            self._db.refresh(orm_snapshot)
        return self._to_domain(orm_snapshot)

    def latest(self, user_id: str) -> Optional[PortfolioSnapshot]:
        """Most recent snapshot for the user."""
        with store_errors(self._db):
            orm_snapshot = self._ordered(user_id).first()
        return self._to_domain(orm_snapshot) if orm_snapshot else None

    def latest_before(self, user_id: str, cutoff: datetime) -> Optional[PortfolioSnapshot]:
        """Latest snapshot with created_at <= cutoff, ties broken by snapshot_id."""
        with store_errors(self._db):
            orm_snapshot = (
                self._ordered(user_id)
                .filter(PortfolioSnapshotORM.created_at <= to_naive_utc(cutoff))
                .first()
            )
        return self._to_domain(orm_snapshot) if orm_snapshot else None

    def page(self, user_id: str, page: int, limit: int) -> tuple[list[PortfolioSnapshot], int]:
        """Return one page of snapshots (newest first) and the total count."""
        with store_errors(self._db):
            total = (
                self._db.query(PortfolioSnapshotORM)
                .filter(PortfolioSnapshotORM.user_id == user_id)
                .count()
            )
            orm_snapshots = (
                self._ordered(user_id)
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
        return [self._to_domain(s) for s in orm_snapshots], total

    def _ordered(self, user_id: str):
        return (
            self._db.query(PortfolioSnapshotORM)
            .filter(PortfolioSnapshotORM.user_id == user_id)
            .order_by(
                PortfolioSnapshotORM.created_at.desc(),
                PortfolioSnapshotORM.snapshot_id.desc(),
            )
        )

    @staticmethod
    def _to_orm(snapshot: PortfolioSnapshot) -> PortfolioSnapshotORM:
        """Convert domain model to ORM model."""
        return PortfolioSnapshotORM(
            snapshot_id=snapshot.snapshot_id,
            user_id=snapshot.user_id,
            created_at=to_naive_utc(snapshot.created_at),
            asset_balances=[
                {
                    "asset_code": b.asset_code,
                    "asset_issuer": b.asset_issuer,
                    "amount": str(b.amount),
                    "value_usd": str(b.value_usd),
                }
                for b in snapshot.asset_balances
            ],
            total_value_usd=snapshot.total_value_usd,
        )

    @staticmethod
    def _to_domain(orm: PortfolioSnapshotORM) -> PortfolioSnapshot:
        """Convert ORM model to domain model."""
        return PortfolioSnapshot(
            snapshot_id=orm.snapshot_id,
            user_id=orm.user_id,
            created_at=to_utc(orm.created_at),
            total_value_usd=round_usd(Decimal(str(orm.total_value_usd))),
            asset_balances=tuple(
                AssetBalance(
                    asset_code=item["asset_code"],
                    asset_issuer=item.get("asset_issuer"),
                    amount=Decimal(item["amount"]),
                    value_usd=Decimal(item["value_usd"]),
                )
                for item in orm.asset_balances or []
            ),
        )
