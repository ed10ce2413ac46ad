"""Portfolio snapshot, history and performance endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import sessionmaker

from stellar_portfolio.api.deps import (
    get_ledger_client,
    get_performance_service,
    get_snapshot_service,
    get_valuation_resolver,
    get_worker_session_factory,
)
from stellar_portfolio.api.schemas import (
    AssetBalanceResponse,
    PortfolioHistoryResponse,
    PortfolioPerformanceResponse,
    SnapshotCreatedResponse,
    SnapshotResponse,
    SnapshotTriggerResponse,
    TimeWindowPerformanceResponse,
)
from stellar_portfolio.app_context import run_snapshots_for_all_users
from stellar_portfolio.config.settings import get_settings
from stellar_portfolio.domain.models import PortfolioSnapshot
from stellar_portfolio.providers import LedgerClient, ValuationResolver
from stellar_portfolio.services import PerformanceService, SnapshotService

router = APIRouter(tags=["portfolio"])


def _snapshot_response(snapshot: PortfolioSnapshot) -> SnapshotResponse:
    return SnapshotResponse(
        snapshot_id=snapshot.snapshot_id,
        user_id=snapshot.user_id,
        created_at=snapshot.created_at,
        asset_balances=[
            AssetBalanceResponse(
                asset_code=b.asset_code,
                asset_issuer=b.asset_issuer,
                amount=str(b.amount),
                value_usd=float(b.value_usd),
            )
            for b in snapshot.asset_balances
        ],
        total_value_usd=snapshot.total_value_usd,
    )


@router.get("/users/{user_id}/portfolio/history", response_model=PortfolioHistoryResponse)
def get_portfolio_history(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> PortfolioHistoryResponse:
    """Get the user's snapshots with pagination, newest first."""
    if limit is None:
        limit = get_settings().default_history_limit
    history = snapshots.get_history(user_id, page=page, limit=limit)
    return PortfolioHistoryResponse(
        snapshots=[_snapshot_response(s) for s in history.snapshots],
        total=history.total,
        page=history.page,
        limit=history.limit,
        total_pages=history.total_pages,
    )


@router.post(
    "/users/{user_id}/portfolio/snapshot",
    response_model=SnapshotCreatedResponse,
    status_code=201,
)
def create_snapshot(
    user_id: str,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> SnapshotCreatedResponse:
    """Manually create a snapshot for the user."""
    snapshot = snapshots.create_snapshot(user_id)
    return SnapshotCreatedResponse(snapshot=_snapshot_response(snapshot))


@router.post("/portfolio/snapshots/trigger", response_model=SnapshotTriggerResponse)
def trigger_snapshot_creation(
    session_factory: sessionmaker = Depends(get_worker_session_factory),
    ledger_client: LedgerClient = Depends(get_ledger_client),
    valuation_resolver: ValuationResolver = Depends(get_valuation_resolver),
) -> SnapshotTriggerResponse:
    """Create snapshots for all users (same path as the scheduled job)."""
    result = run_snapshots_for_all_users(
        session_factory=session_factory,
        ledger_client=ledger_client,
        valuation_resolver=valuation_resolver,
        max_workers=get_settings().snapshot_max_workers,
    )
    return SnapshotTriggerResponse(
        success=result.success,
        failed=result.failed,
        failures=result.failures,
    )


@router.get("/users/{user_id}/portfolio/performance", response_model=PortfolioPerformanceResponse)
def get_portfolio_performance(
    user_id: str,
    performance: PerformanceService = Depends(get_performance_service),
) -> PortfolioPerformanceResponse:
    """Get 24h, 7d and 30d performance."""
    report = performance.compute_performance(user_id)
    return PortfolioPerformanceResponse(
        user_id=report.user_id,
        current_value_usd=float(report.current_value_usd),
        calculated_at=report.calculated_at,
        windows=[
            TimeWindowPerformanceResponse(
                window=w.window,
                has_data=w.has_data,
                absolute_pnl=float(w.absolute_pnl) if w.absolute_pnl is not None else None,
                percentage_change=(
                    float(w.percentage_change) if w.percentage_change is not None else None
                ),
                current_value_usd=float(w.current_value_usd),
                baseline_value_usd=(
                    float(w.baseline_value_usd) if w.baseline_value_usd is not None else None
                ),
                baseline_date=w.baseline_date,
            )
            for w in report.windows
        ],
    )
