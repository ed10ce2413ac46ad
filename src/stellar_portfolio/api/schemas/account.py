"""Pydantic schemas for Stellar account endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class StellarAccountLink(BaseModel):
    """Request schema for linking a Stellar account."""

    public_key: str = Field(..., min_length=1, description="Stellar account public key (G...)")
    label: Optional[str] = Field(default=None, max_length=100)


class StellarAccountLabelUpdate(BaseModel):
    """Request schema for relabeling an account."""

    label: Optional[str] = Field(default=None, max_length=100)


class StellarAccountResponse(BaseModel):
    """Response schema for a linked account."""

    model_config = {"from_attributes": True}

    account_id: str
    public_key: str
    label: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
