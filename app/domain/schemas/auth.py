"""Pydantic schemas for Admin and Auth."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class AdminRead(BaseModel):
    id: int
    name: str
    email: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AdminContext(BaseModel):
    """Identity of the admin performing an operation."""
    id: int
    email: str

    model_config = {"from_attributes": True, "frozen": True}


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    admin: AdminRead
