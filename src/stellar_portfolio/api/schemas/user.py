"""Pydantic schemas for user endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Request schema for creating a user."""

    email: Optional[str] = Field(default=None, max_length=255)
    display_name: Optional[str] = Field(default=None, max_length=255)


class UserResponse(BaseModel):
    """Response schema for a user."""

    model_config = {"from_attributes": True}

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    primary_public_key: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(BaseModel):
    """Request schema for updating a user profile. Omitted fields are unchanged."""

    email: Optional[str] = Field(default=None, max_length=255)
    display_name: Optional[str] = Field(default=None, max_length=255)
