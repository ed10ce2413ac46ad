"""Stellar account linking endpoints."""

from fastapi import APIRouter, Depends, Response

from stellar_portfolio.api.deps import get_account_service
from stellar_portfolio.api.schemas import (
    StellarAccountLink,
    StellarAccountLabelUpdate,
    StellarAccountResponse,
)
from stellar_portfolio.services import AccountService

router = APIRouter(prefix="/users/{user_id}/accounts", tags=["accounts"])


@router.post("", response_model=StellarAccountResponse, status_code=201)
def link_account(
    user_id: str,
    data: StellarAccountLink,
    accounts: AccountService = Depends(get_account_service),
) -> StellarAccountResponse:
    """Link a new Stellar account to the user."""
    account = accounts.link_account(user_id, data.public_key, data.label)
    return StellarAccountResponse.model_validate(account)


@router.get("", response_model=list[StellarAccountResponse])
def list_accounts(
    user_id: str,
    accounts: AccountService = Depends(get_account_service),
) -> list[StellarAccountResponse]:
    """List active linked accounts."""
    return [StellarAccountResponse.model_validate(a) for a in accounts.list_accounts(user_id)]


@router.get("/{account_id}", response_model=StellarAccountResponse)
def get_account(
    user_id: str,
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
) -> StellarAccountResponse:
    """Get one linked account."""
    return StellarAccountResponse.model_validate(accounts.get_account(user_id, account_id))


@router.delete("/{account_id}", status_code=204)
def unlink_account(
    user_id: str,
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
) -> Response:
    """Unlink (soft delete) an account."""
    accounts.unlink_account(user_id, account_id)
    return Response(status_code=204)


@router.patch("/{account_id}/label", response_model=StellarAccountResponse)
def update_label(
    user_id: str,
    account_id: str,
    data: StellarAccountLabelUpdate,
    accounts: AccountService = Depends(get_account_service),
) -> StellarAccountResponse:
    """Update an account label."""
    account = accounts.update_label(user_id, account_id, data.label)
    return StellarAccountResponse.model_validate(account)


@router.post("/{account_id}/primary", status_code=200)
def set_primary_account(
    user_id: str,
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
) -> dict[str, bool]:
    """Make the account the user's primary account."""
    accounts.set_primary_account(user_id, account_id)
    return {"success": True}
