"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stellar_portfolio.app_context import get_app_context
from stellar_portfolio.config.settings import get_settings
from stellar_portfolio.config.logging_config import setup_logging
from stellar_portfolio.repositories.sqlalchemy.database import init_db
from stellar_portfolio.api.routers import users_router, accounts_router, portfolio_router
from stellar_portfolio.core.exceptions import AppError
from stellar_portfolio.services import SnapshotScheduler

# Error code -> HTTP status; anything else is a 400
_STATUS_BY_CODE = {
    "NOT_FOUND": 404,
    "NO_SNAPSHOT_DATA": 404,
    "DUPLICATE_ACCOUNT": 409,
    "VALUATION_UNAVAILABLE": 502,
    "LEDGER_UNAVAILABLE": 502,
    "STORE_UNAVAILABLE": 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()

    settings = get_settings()
    scheduler = None
    if settings.snapshot_schedule_enabled:
        scheduler = SnapshotScheduler(
            run_snapshots=get_app_context().run_snapshots,
            interval_minutes=settings.snapshot_interval_minutes,
        )
        scheduler.start()
    yield
    if scheduler is not None:
        scheduler.shutdown()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Stellar portfolio snapshots and performance tracking",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(users_router)
app.include_router(accounts_router)
app.include_router(portfolio_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_STATUS_BY_CODE.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
