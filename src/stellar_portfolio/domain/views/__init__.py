"""View models for service outputs."""

from stellar_portfolio.domain.views.performance import (
    PerformanceWindow,
    PerformanceReport,
    SnapshotPage,
    SnapshotRunResult,
)

__all__ = [
    "PerformanceWindow",
    "PerformanceReport",
    "SnapshotPage",
    "SnapshotRunResult",
]
